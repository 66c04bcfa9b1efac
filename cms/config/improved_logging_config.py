"""
Improved Logging Configuration - Reduces noise and provides clear categories
"""

import logging
import sys
import os
from typing import Dict
from enum import Enum

class LogCategory(Enum):
    """Log categories for better organization"""
    API = "API"
    STORAGE = "STORE"
    SECURITY = "SEC"
    BUSINESS = "BIZ"

class SmartLogger:
    """Smart logger that reduces noise and provides structured output"""

    def __init__(self, name: str, category: LogCategory = None):
        self.logger = logging.getLogger(name)
        self.category = category or LogCategory.API
        self.name = name

        # Set log level based on environment
        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.logger.setLevel(getattr(logging, log_level, logging.INFO))

        self.verbose = os.getenv('LOG_VERBOSE', 'false').lower() == 'true'

        if not self.logger.handlers:
            self._setup_handlers()

    def _setup_handlers(self):
        """Setup log handlers with smart formatting"""
        console_handler = logging.StreamHandler(sys.stdout)

        # Use compact format for production, verbose for debug
        if self.verbose:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                datefmt='%H:%M:%S'
            )
        else:
            formatter = logging.Formatter(
                '[%(levelname)s] %(message)s'
            )

        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

    def storage_operation(self, operation: str, name: str):
        """Log file operations on the document directory"""
        self.logger.debug(f"STORE: {operation} {name}")

    def business_event(self, event: str, details: str = None):
        """Log business logic events"""
        if details:
            self.logger.info(f"BIZ: {event} - {details}")
        else:
            self.logger.info(f"BIZ: {event}")

    def security_event(self, event: str, details: str = None):
        """Log security events (always logged)"""
        if details:
            self.logger.warning(f"SEC: {event} - {details}")
        else:
            self.logger.warning(f"SEC: {event}")

    def error(self, message: str, exc_info: bool = False, context: Dict = None):
        """Log errors with context"""
        if context:
            context_str = " | ".join([f"{k}={v}" for k, v in context.items()])
            self.logger.error(f"ERROR: {message} | {context_str}", exc_info=exc_info)
        else:
            self.logger.error(f"ERROR: {message}", exc_info=exc_info)

    def warning(self, message: str, context: Dict = None):
        """Log warnings"""
        if context:
            context_str = " | ".join([f"{k}={v}" for k, v in context.items()])
            self.logger.warning(f"WARN: {message} | {context_str}")
        else:
            self.logger.warning(f"WARN: {message}")

    def info(self, message: str):
        """Info logging tagged with the logger category"""
        self.logger.info(f"{self.category.value}: {message}")

def get_smart_logger(name: str, category: LogCategory = None) -> SmartLogger:
    """Get a smart logger instance"""
    return SmartLogger(name, category)

def configure_app_logging(debug: bool = False):
    """Configure application-wide logging settings"""
    # passlib logs a trapped warning about newer bcrypt builds on first hash
    logging.getLogger('passlib').setLevel(logging.ERROR)
    logging.getLogger('markdown').setLevel(logging.WARNING)

    # Werkzeug's access log duplicates the request logger outside debug mode
    if not debug:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)
