from flask import Blueprint, current_app, flash, make_response, redirect, render_template, request, url_for
from flask_login import login_required

from config.improved_logging_config import get_smart_logger, LogCategory
from services.document_store import DocumentStore, DocumentNotFound, InvalidDocumentName
from services.markdown_renderer import render_markdown

logger = get_smart_logger(__name__, LogCategory.BUSINESS)

documents_bp = Blueprint('documents_bp', __name__)


def _store() -> DocumentStore:
    return DocumentStore(current_app.config['DATA_PATH'])


def _missing(exc: DocumentNotFound):
    flash(exc.message)
    return redirect(url_for('documents_bp.index'))


@documents_bp.route('/', methods=['GET'])
def index():
    return render_template('index.html', documents=_store().list_documents())


@documents_bp.route('/new', methods=['GET'])
@login_required
def new_document():
    return render_template('new.html')


@documents_bp.route('/new', methods=['POST'])
@login_required
def create_document():
    # The form field is named "content" for historical reasons; it holds the filename
    requested_name = request.form.get('content', '')
    try:
        filename = _store().create(requested_name)
    except InvalidDocumentName as exc:
        flash(exc.message)
        return render_template('new.html', filename=requested_name), 422

    logger.business_event("Document created", filename)
    flash(f'{filename} has been created.')
    return redirect(url_for('documents_bp.index'))


@documents_bp.route('/<filename>', methods=['GET'])
def view_document(filename):
    store = _store()
    try:
        content = store.read(filename)
    except DocumentNotFound as exc:
        return _missing(exc)

    if store.is_markdown(filename):
        return render_template('document.html', filename=filename, html=render_markdown(content))

    response = make_response(content)
    response.headers['Content-Type'] = 'text/plain; charset=utf-8'
    return response


@documents_bp.route('/<filename>/edit', methods=['GET'])
@login_required
def edit_document(filename):
    try:
        content = _store().read(filename)
    except DocumentNotFound as exc:
        return _missing(exc)
    return render_template('edit.html', filename=filename, content=content)


@documents_bp.route('/<filename>', methods=['POST'])
@login_required
def update_document(filename):
    try:
        _store().write(filename, request.form.get('content', ''))
    except DocumentNotFound as exc:
        return _missing(exc)

    logger.business_event("Document updated", filename)
    flash(f'{filename} has been updated.')
    return redirect(url_for('documents_bp.index'))


@documents_bp.route('/<filename>/delete', methods=['POST'])
@login_required
def delete_document(filename):
    try:
        _store().delete(filename)
    except DocumentNotFound as exc:
        return _missing(exc)

    logger.business_event("Document deleted", filename)
    flash(f'{filename} has been deleted.')
    return redirect(url_for('documents_bp.index'))
