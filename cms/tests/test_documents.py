from conftest import flashed_messages, HISTORY_CONTENT

SIGNIN_REQUIRED = 'You must be signed in to do that.'


def test_index_lists_every_document(client):
    """The index shows each file in the data directory and a sign-in link."""
    response = client.get('/')
    assert response.status_code == 200
    assert response.content_type == 'text/html; charset=utf-8'
    body = response.get_data(as_text=True)
    for name in ('about.md', 'changes.txt', 'history.txt'):
        assert name in body
    assert 'Sign in' in body
    assert 'edit</a>' not in body


def test_index_picks_up_files_added_outside_the_app(client, data_path):
    (data_path / 'notes.txt').write_text('dropped in by hand')
    response = client.get('/')
    assert 'notes.txt' in response.get_data(as_text=True)


def test_index_hides_dotfiles(client, data_path):
    (data_path / '.gitkeep').write_text('')
    body = client.get('/').get_data(as_text=True)
    assert '.gitkeep' not in body


def test_index_signed_in_shows_document_controls(admin_client):
    body = admin_client.get('/').get_data(as_text=True)
    assert 'Signed in as admin' in body
    assert '/history.txt/edit' in body
    assert '/history.txt/delete' in body
    assert 'New Document' in body


def test_view_markdown_document_renders_html(client):
    response = client.get('/about.md')
    assert response.status_code == 200
    assert response.content_type == 'text/html; charset=utf-8'
    assert '<h1>Python is...</h1>' in response.get_data(as_text=True)


def test_view_markdown_supports_fenced_code(client, data_path):
    (data_path / 'snippet.md').write_text("```\nprint('hi')\n```\n")
    body = client.get('/snippet.md').get_data(as_text=True)
    assert '<pre><code>' in body


def test_view_text_document_is_plain_text(client):
    response = client.get('/changes.txt')
    assert response.status_code == 200
    assert response.mimetype == 'text/plain'
    assert response.get_data(as_text=True) == 'This is the changes page.'


def test_view_text_document_that_is_not_utf8(client, data_path):
    (data_path / 'legacy.txt').write_bytes(b'caf\xe9')
    response = client.get('/legacy.txt')
    assert response.status_code == 200
    assert response.get_data(as_text=True).startswith('caf')


def test_view_nonexistent_document_redirects(client):
    response = client.get('/does_not_exist.txt')
    assert response.status_code == 302
    assert response.headers['Location'] == '/'
    assert flashed_messages(client) == ['does_not_exist.txt does not exist.']


def test_flash_message_is_shown_once(client):
    client.get('/does_not_exist.txt')
    first = client.get('/').get_data(as_text=True)
    assert 'does_not_exist.txt does not exist.' in first
    second = client.get('/').get_data(as_text=True)
    assert 'does_not_exist.txt does not exist.' not in second


def test_view_edit_page(admin_client):
    response = admin_client.get('/history.txt/edit')
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'Editing content of history.txt:' in body
    assert HISTORY_CONTENT in body
    assert '<button type="submit">' in body


def test_view_edit_page_signed_out(client):
    response = client.get('/history.txt/edit')
    assert response.status_code == 302
    assert flashed_messages(client) == [SIGNIN_REQUIRED]


def test_view_edit_page_for_missing_document(admin_client):
    response = admin_client.get('/missing.txt/edit')
    assert response.status_code == 302
    assert flashed_messages(admin_client) == ['missing.txt does not exist.']


def test_update_document(admin_client, data_path):
    response = admin_client.post('/history.txt', data={'content': 'new changes'})
    assert response.status_code == 302
    assert flashed_messages(admin_client) == ['history.txt has been updated.']
    assert (data_path / 'history.txt').read_text() == 'new changes'

    response = admin_client.get('/history.txt')
    assert response.status_code == 200
    assert 'new changes' in response.get_data(as_text=True)


def test_update_document_signed_out(client, data_path):
    response = client.post('/history.txt', data={'content': 'new changes'})
    assert response.status_code == 302
    assert flashed_messages(client) == [SIGNIN_REQUIRED]
    assert (data_path / 'history.txt').read_text() == HISTORY_CONTENT


def test_update_missing_document_does_not_create_it(admin_client, data_path):
    response = admin_client.post('/ghost.txt', data={'content': 'boo'})
    assert response.status_code == 302
    assert flashed_messages(admin_client) == ['ghost.txt does not exist.']
    assert not (data_path / 'ghost.txt').exists()


def test_new_document_form(admin_client):
    response = admin_client.get('/new')
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'Add a new document:' in body
    assert '<button type="submit">Create</button>' in body


def test_new_document_form_signed_out(client):
    response = client.get('/new')
    assert response.status_code == 302
    assert flashed_messages(client) == [SIGNIN_REQUIRED]


def test_create_document(admin_client, data_path):
    response = admin_client.post('/new', data={'content': 'test.txt'})
    assert response.status_code == 302
    assert flashed_messages(admin_client) == ['test.txt has been created.']
    assert (data_path / 'test.txt').read_text() == ''

    response = admin_client.get(response.headers['Location'])
    assert response.status_code == 200
    assert 'test.txt' in response.get_data(as_text=True)


def test_create_document_signed_out(client, data_path):
    response = client.post('/new', data={'content': 'test.txt'})
    assert response.status_code == 302
    assert flashed_messages(client) == [SIGNIN_REQUIRED]
    assert not (data_path / 'test.txt').exists()


def test_create_document_with_empty_name(admin_client):
    response = admin_client.post('/new', data={'content': ''})
    assert response.status_code == 422
    body = response.get_data(as_text=True)
    assert 'A filename with .txt or .md file extension is required.' in body
    assert 'Add a new document:' in body
    assert '<button type="submit">Create</button>' in body


def test_create_document_without_extension(admin_client, data_path):
    response = admin_client.post('/new', data={'content': 'filename'})
    assert response.status_code == 422
    assert 'A filename with .txt or .md file extension is required.' in response.get_data(as_text=True)
    assert not (data_path / 'filename').exists()


def test_create_document_with_unsupported_extension(admin_client):
    response = admin_client.post('/new', data={'content': 'report.pdf'})
    assert response.status_code == 422


def test_create_document_that_already_exists(admin_client, data_path):
    response = admin_client.post('/new', data={'content': 'history.txt'})
    assert response.status_code == 422
    assert 'history.txt already exists.' in response.get_data(as_text=True)
    assert (data_path / 'history.txt').read_text() == HISTORY_CONTENT


def test_create_document_outside_data_directory(admin_client, tmp_path):
    response = admin_client.post('/new', data={'content': '../escape.txt'})
    assert response.status_code == 422
    assert not (tmp_path / 'escape.txt').exists()


def test_delete_document(admin_client, data_path):
    (data_path / 'test.txt').write_text('')

    response = admin_client.post('/test.txt/delete')
    assert response.status_code == 302
    assert flashed_messages(admin_client) == ['test.txt has been deleted.']
    assert not (data_path / 'test.txt').exists()

    body = admin_client.get('/').get_data(as_text=True)
    assert 'href="/test.txt"' not in body


def test_delete_document_signed_out(client, data_path):
    response = client.post('/history.txt/delete')
    assert response.status_code == 302
    assert flashed_messages(client) == [SIGNIN_REQUIRED]
    assert (data_path / 'history.txt').exists()


def test_delete_missing_document(admin_client):
    response = admin_client.post('/missing.txt/delete')
    assert response.status_code == 302
    assert flashed_messages(admin_client) == ['missing.txt does not exist.']
