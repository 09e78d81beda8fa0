"""
Duration probing tests
"""
import subprocess

import pytest

from transcriber.errors import DurationProbeError
from transcriber.services import media_service


def _fake_run(stdout='', returncode=0, stderr=''):
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    return run, calls


class TestProbeDuration:

    def test_parses_seconds(self, monkeypatch):
        run, calls = _fake_run('42.500000\n')
        monkeypatch.setattr(media_service.subprocess, 'run', run)

        assert media_service.probe_duration('/tmp/a b.mp3') == 42.5
        assert calls[0] == [
            'ffprobe', '-v', 'quiet', '-show_entries', 'format=duration',
            '-of', 'csv=p=0', '/tmp/a b.mp3',
        ]

    def test_nonzero_exit(self, monkeypatch):
        run, _ = _fake_run('', returncode=1, stderr='Invalid data found')
        monkeypatch.setattr(media_service.subprocess, 'run', run)

        with pytest.raises(DurationProbeError, match='Invalid data'):
            media_service.probe_duration('x.mp3')

    def test_unparsable(self, monkeypatch):
        run, _ = _fake_run('N/A\n')
        monkeypatch.setattr(media_service.subprocess, 'run', run)

        with pytest.raises(DurationProbeError):
            media_service.probe_duration('x.mp3')

    def test_missing_binary(self, monkeypatch):
        def run(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])
        monkeypatch.setattr(media_service.subprocess, 'run', run)

        with pytest.raises(DurationProbeError, match='not found'):
            media_service.probe_duration('x.mp3', ffprobe_bin='ffprobe-missing')

    def test_timeout(self, monkeypatch):
        def run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs.get('timeout'))
        monkeypatch.setattr(media_service.subprocess, 'run', run)

        with pytest.raises(DurationProbeError, match='timed out'):
            media_service.probe_duration('x.mp3', timeout=2)


class TestCheckDuration:

    @pytest.mark.parametrize('out,expected', [
        ('12.0', True),
        ('60.0', True),
        ('60.01', False),
        ('nan', False),
    ])
    def test_ceiling(self, monkeypatch, out, expected):
        run, _ = _fake_run(out)
        monkeypatch.setattr(media_service.subprocess, 'run', run)
        assert media_service.check_duration('x.mp3', 60) is expected

    def test_probe_failure_rejects(self, monkeypatch):
        run, _ = _fake_run('', returncode=1)
        monkeypatch.setattr(media_service.subprocess, 'run', run)
        assert media_service.check_duration('x.mp3', 60) is False


def test_ffprobe_available(monkeypatch):
    monkeypatch.setattr(media_service.shutil, 'which', lambda name: None)
    assert media_service.ffprobe_available() is False
    monkeypatch.setattr(media_service.shutil, 'which', lambda name: '/usr/bin/' + name)
    assert media_service.ffprobe_available() is True
