"""
Test Configuration and Fixtures
"""
import io
import os

import pytest

from transcriber import create_app
from transcriber.errors import TranscriptionError
from transcriber.services import media_service

os.environ.setdefault('AWS_DEFAULT_REGION', 'us-east-1')

TEST_TOKEN = 'test-token'
TEST_ID = '6f1c1f8e-2b9a-4c55-9a63-3f1f0d3a2b7e'


class FakeTranscriptionService:
    """Stands in for TranscriptionService so no AWS call is made"""

    def __init__(self):
        self.submitted = []
        self.ready = {}
        self.fail_submit = False
        self.fail_status = False

    def submit(self, path, unique_id=None):
        if self.fail_submit:
            raise TranscriptionError('AccessDenied')
        with open(path, 'rb') as fh:
            self.submitted.append({'path': path, 'body': fh.read()})
        return unique_id or TEST_ID

    def transcript_url(self, unique_id):
        if self.fail_status:
            raise TranscriptionError('SlowDown')
        return self.ready.get(unique_id)


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create application for testing"""
    app = create_app('testing')
    upload_dir = tmp_path / 'uploads'
    upload_dir.mkdir()
    app.config['UPLOAD_FOLDER'] = str(upload_dir)
    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def auth_headers():
    return {'Authorization': f'Bearer {TEST_TOKEN}'}


@pytest.fixture(scope='function')
def fake_service(app):
    service = FakeTranscriptionService()
    app.extensions['transcription_service'] = service
    return service


@pytest.fixture(scope='function')
def short_audio(monkeypatch):
    """Every probed file reports a duration within the limit"""
    monkeypatch.setattr(media_service, 'check_duration', lambda *a, **kw: True)


@pytest.fixture(scope='function')
def long_audio(monkeypatch):
    monkeypatch.setattr(media_service, 'check_duration', lambda *a, **kw: False)


@pytest.fixture(scope='function')
def mp3_upload():
    """Build a multipart body holding one audio file"""
    def _build(name='clip.mp3', body=b'ID3fake-mp3-bytes'):
        return {'file': (io.BytesIO(body), name)}
    return _build
