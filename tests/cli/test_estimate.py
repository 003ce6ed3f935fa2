# tests/cli/test_estimate.py

from unittest.mock import patch

from typer.testing import CliRunner

from initres.cli import app
from initres.core.exceptions import BackendQueryError
from initres.models.metrics import ResourceKind, UsageEstimate

runner = CliRunner()


class _FakeSource:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []
        self.closed = False

    async def get_usage_percentile(self, kind, percentile, image, namespace, exact_match, start, end):
        self.calls.append((kind, percentile, image, namespace, exact_match, start, end))
        if self.error:
            raise self.error
        return self.result

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True


def _patch_source(fake):
    async def _create(uri, kind="hawkular"):
        fake.uri = uri
        fake.kind = kind
        return fake

    return patch("initres.cli.estimate.create_data_source", side_effect=_create)


def test_estimate_prints_value_and_count():
    fake = _FakeSource(result=UsageEstimate(value=250, count=42))

    with _patch_source(fake):
        result = runner.invoke(
            app,
            [
                "estimate",
                "--image",
                "nginx:1.25",
                "--kind",
                "memory",
                "--percentile",
                "95",
                "--window",
                "2d",
                "--source",
                "http://hawkular:8080?tenant=t1",
                "--exact",
            ],
        )

    assert result.exit_code == 0, result.output
    assert "p95 memory usage of nginx:1.25: 250 (42 samples)" in result.stdout
    assert fake.uri == "http://hawkular:8080?tenant=t1"
    assert fake.closed is True

    kind, percentile, image, namespace, exact_match, start, end = fake.calls[0]
    assert kind == ResourceKind.MEMORY
    assert percentile == 95
    assert image == "nginx:1.25"
    assert exact_match is True
    assert (end - start).days == 2


def test_estimate_failure_exits_with_error():
    fake = _FakeSource(error=BackendQueryError("backend down"))

    with _patch_source(fake):
        result = runner.invoke(app, ["estimate", "--image", "nginx", "--source", "http://hawkular:8080"])

    assert result.exit_code == 1


def test_estimate_rejects_invalid_window():
    with _patch_source(_FakeSource()):
        result = runner.invoke(
            app, ["estimate", "--image", "nginx", "--source", "http://hawkular:8080", "--window", "forever"]
        )

    assert result.exit_code == 2


def test_estimate_requires_a_source():
    with patch("initres.cli.estimate.config") as mock_config:
        mock_config.INITRES_SOURCE_URI = ""
        result = runner.invoke(app, ["estimate", "--image", "nginx"])

    assert result.exit_code == 2


def test_version_option():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "initres version: 0.1.0" in result.stdout
