def _register(client, email='alice@example.edu', role='student', password='secret123'):
    return client.post(
        '/api/user/register',
        json={'email': email, 'username': email.split('@')[0], 'password': password, 'role': role},
    )


def test_test_api_reports_connection(client) -> None:
    response = client.get('/api/user/testAPI')

    assert response.status_code == 200
    assert response.json() == {'message': 'Auth route is connected.'}


def test_register_returns_user_without_password(client) -> None:
    response = _register(client)

    assert response.status_code == 200
    user = response.json()['user']
    assert user['email'] == 'alice@example.edu'
    assert user['role'] == 'student'
    assert 'password' not in user
    assert 'hashed_password' not in user


def test_register_duplicate_email_returns_400(client) -> None:
    _register(client)

    response = _register(client)

    assert response.status_code == 400
    assert response.json() == {'detail': 'This email has already been registered.'}


def test_register_rejects_malformed_body_with_400(client) -> None:
    response = client.post(
        '/api/user/register',
        json={'email': 'alice@example.edu', 'username': 'alice', 'password': 'secret123', 'role': 'admin'},
    )

    assert response.status_code == 400
    assert response.json() == {'detail': 'Role must be either student or instructor.'}


def test_register_rejects_missing_fields_with_400(client) -> None:
    response = client.post('/api/user/register', json={'email': 'alice@example.edu'})

    assert response.status_code == 400


def test_login_returns_bearer_token_and_user(client) -> None:
    _register(client)

    response = client.post('/api/user/login', json={'email': 'alice@example.edu', 'password': 'secret123'})

    assert response.status_code == 200
    body = response.json()
    assert body['token_type'] == 'bearer'
    assert body['token']
    assert body['user']['email'] == 'alice@example.edu'


def test_login_with_unknown_email_returns_401(client) -> None:
    response = client.post('/api/user/login', json={'email': 'ghost@example.edu', 'password': 'secret123'})

    assert response.status_code == 401
    assert response.json() == {'detail': 'This email has not been registered.'}


def test_login_with_wrong_password_returns_401(client) -> None:
    _register(client)

    response = client.post('/api/user/login', json={'email': 'alice@example.edu', 'password': 'wrong-password'})

    assert response.status_code == 401
    assert response.json() == {'detail': 'Incorrect password.'}


def test_root_reports_status(client) -> None:
    response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'status': 'Course Enrollment API Running'}
