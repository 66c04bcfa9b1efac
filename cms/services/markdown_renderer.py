import markdown

MARKDOWN_EXTENSIONS = ['tables', 'fenced_code']


def render_markdown(text: str) -> str:
    """Convert a markdown document to an HTML fragment."""
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS, output_format='html')
    return md.convert(text)
