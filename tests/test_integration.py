"""Integration tests for the docprobe API."""

from pathlib import Path
from unittest.mock import patch

import pytest
from docprobe import (
    BatchSummary,
    ConfigurationError,
    EventType,
    InputFileError,
    NetworkConfig,
    ProbeConfig,
    SupportChecker,
    WorkItem,
    check_blocking,
)
from fakes import FakeAsyncHttpClient, FakeHttpClient
from pydantic import ValidationError


def make_config(tmp_path: Path, **kwargs) -> ProbeConfig:
    output = kwargs.pop("output", {})
    return ProbeConfig(
        input_file=tmp_path / "languages.txt",
        base_url="https://docs.example.com",
        output={
            "supported_file": tmp_path / "supported.txt",
            "unsupported_file": tmp_path / "unsupported.txt",
            **output,
        },
        **kwargs,
    )


class TestProbeConfig:
    """Tests for ProbeConfig."""

    def test_default_config(self):
        """Test default values."""
        config = ProbeConfig()
        assert config.input_file == Path("languages.txt")
        assert config.base_url == "https://docs.oracle.com"
        assert config.max_concurrent == 10
        assert config.network.timeout == 5.0
        assert config.network.method == "GET"
        assert config.output.supported_file == Path("supported_languages.txt")
        assert config.output.append is False

    def test_max_concurrent_must_be_positive(self):
        """Test max_concurrent < 1 is rejected."""
        with pytest.raises(ValidationError):
            ProbeConfig(max_concurrent=0)

    def test_timeout_must_be_positive(self):
        """Test the probe timeout must be positive."""
        with pytest.raises(ValidationError):
            ProbeConfig(network=NetworkConfig(timeout=0))

    def test_base_url_validated(self):
        """Test base_url must be an absolute http(s) URL."""
        with pytest.raises(ValidationError):
            ProbeConfig(base_url="ftp://docs.example.com")
        with pytest.raises(ValidationError):
            ProbeConfig(base_url="docs.example.com")

    def test_base_url_trailing_slash_stripped(self):
        """Test a trailing slash on base_url is normalized."""
        assert ProbeConfig(base_url="https://docs.example.com/").base_url == "https://docs.example.com"

    def test_extra_fields_forbidden(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ValidationError):
            ProbeConfig(max_workers=5)

    def test_yaml_roundtrip(self):
        """Test YAML serialization keeps settings."""
        config = ProbeConfig(max_concurrent=20, network={"timeout": 2.5, "method": "HEAD"})
        loaded = ProbeConfig.from_yaml(config.to_yaml())
        assert loaded == config

    def test_from_yaml_file(self, tmp_path):
        """Test loading a YAML file with nested sections."""
        path = tmp_path / "docprobe.yaml"
        path.write_text("max_concurrent: 4\nnetwork:\n  timeout: 1.5\noutput:\n  append: true\n")

        config = ProbeConfig.from_yaml_file(path)

        assert config.max_concurrent == 4
        assert config.network.timeout == 1.5
        assert config.output.append is True

    def test_empty_yaml(self):
        """Test an empty YAML document gives defaults."""
        assert ProbeConfig.from_yaml("") == ProbeConfig()


class TestSupportChecker:
    """Tests for SupportChecker."""

    @pytest.mark.asyncio
    async def test_run_from_input_file(self, tmp_path):
        """Test a full batch from file to partition files."""
        (tmp_path / "languages.txt").write_text("en English\nxx Nonexistent\nbroken\n")
        config = make_config(tmp_path)
        events = []

        async with SupportChecker(config, http_client=FakeHttpClient(statuses={"en": 200}), emit=events.append) as checker:
            summary = await checker.run()

        assert summary == BatchSummary(
            total=2,
            supported_count=1,
            unsupported_count=1,
            skipped_lines=1,
            duration_seconds=summary.duration_seconds,
        )
        assert (tmp_path / "supported.txt").read_text() == "English (en): https://docs.example.com/en/cloud/\n"
        assert (tmp_path / "unsupported.txt").read_text() == (
            "Nonexistent (xx): https://docs.example.com/xx/cloud/ [404]\n"
        )
        assert checker.supported == ("English (en): https://docs.example.com/en/cloud/",)

        types = [event.type for event in events]
        assert types[0] == EventType.ITEM_SKIPPED
        assert types[-1] == EventType.BATCH_COMPLETED
        assert types.count(EventType.PROBE_COMPLETED) == 2

    @pytest.mark.asyncio
    async def test_run_with_explicit_items(self, tmp_path):
        """Test passing items directly skips the input file."""
        config = make_config(tmp_path)

        async with SupportChecker(config, http_client=FakeHttpClient(default_status=200)) as checker:
            summary = await checker.run([WorkItem("en", "English"), WorkItem("fr", "French")])

        assert summary.supported_count == 2
        assert summary.skipped_lines == 0

    @pytest.mark.asyncio
    async def test_missing_input_aborts_before_output(self, tmp_path):
        """Test a missing input file fails before touching result files."""
        config = make_config(tmp_path)
        client = FakeHttpClient()

        async with SupportChecker(config, http_client=client) as checker:
            with pytest.raises(InputFileError):
                await checker.run()

        assert client.calls == []
        assert not (tmp_path / "supported.txt").exists()
        assert not (tmp_path / "unsupported.txt").exists()

    @pytest.mark.asyncio
    async def test_invalid_ceiling_aborts_before_dispatch(self, tmp_path):
        """Test an invalid ceiling that bypassed validation is still fatal."""
        config = make_config(tmp_path).model_copy(update={"max_concurrent": 0})
        client = FakeHttpClient()

        async with SupportChecker(config, http_client=client) as checker:
            with pytest.raises(ConfigurationError):
                await checker.run([WorkItem("en", "English")])

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_unwritable_output_is_configuration_error(self, tmp_path):
        """Test an output file that cannot be opened aborts before dispatch."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        config = make_config(tmp_path, output={"supported_file": blocker / "supported.txt"})
        client = FakeHttpClient()

        async with SupportChecker(config, http_client=client) as checker:
            with pytest.raises(ConfigurationError):
                await checker.run([WorkItem("en", "English")])

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_unwritable_output_keeps_previous_results(self, tmp_path):
        """Test a failed open of one output file leaves the other untouched."""
        supported = tmp_path / "supported.txt"
        supported.write_text("English (en): https://docs.example.com/en/cloud/\n")
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        config = make_config(tmp_path, output={"unsupported_file": blocker / "unsupported.txt"})

        async with SupportChecker(config, http_client=FakeHttpClient()) as checker:
            with pytest.raises(ConfigurationError):
                await checker.run([WorkItem("en", "English")])

        assert supported.read_text() == "English (en): https://docs.example.com/en/cloud/\n"

    @pytest.mark.asyncio
    async def test_rerun_truncates_by_default(self, tmp_path):
        """Test re-running overwrites previous results."""
        (tmp_path / "languages.txt").write_text("en English\n")
        config = make_config(tmp_path)

        for _ in range(2):
            async with SupportChecker(config, http_client=FakeHttpClient(statuses={"en": 200})) as checker:
                await checker.run()

        assert (tmp_path / "supported.txt").read_text().count("(en)") == 1

    @pytest.mark.asyncio
    async def test_rerun_appends_in_append_mode(self, tmp_path):
        """Test re-running in append mode appends rather than deduplicates."""
        (tmp_path / "languages.txt").write_text("en English\nxx Nonexistent\n")
        config = make_config(tmp_path, output={"append": True})

        for _ in range(2):
            async with SupportChecker(config, http_client=FakeHttpClient(statuses={"en": 200})) as checker:
                await checker.run()

        assert (tmp_path / "supported.txt").read_text().count("(en)") == 2
        assert (tmp_path / "unsupported.txt").read_text().count("(xx)") == 2

    @pytest.mark.asyncio
    async def test_run_requires_context(self, tmp_path):
        """Test run() outside 'async with' without a client fails clearly."""
        checker = SupportChecker(make_config(tmp_path))
        with pytest.raises(RuntimeError):
            await checker.run([])

    @pytest.mark.asyncio
    async def test_builds_client_from_network_config(self, tmp_path):
        """Test the owned client is configured from config.network and closed."""
        (tmp_path / "languages.txt").write_text("en English\n")
        config = make_config(tmp_path, network={"timeout": 2.0, "user_agent": "probe-test", "method": "HEAD"})
        FakeAsyncHttpClient.instances.clear()

        with patch("docprobe.core.checker.AsyncHttpClient", FakeAsyncHttpClient):
            async with SupportChecker(config) as checker:
                summary = await checker.run()

        client = FakeAsyncHttpClient.instances[0]
        assert client.kwargs["default_timeout"] == 2.0
        assert client.kwargs["user_agent"] == "probe-test"
        assert client.methods == ["HEAD"]
        assert client.entered and client.closed
        assert summary.supported_count == 1


class TestCheckBlocking:
    """Tests for the blocking wrapper."""

    def test_check_blocking(self, tmp_path):
        """Test the sync wrapper runs a whole batch."""
        (tmp_path / "languages.txt").write_text("en English\nfr French\nxx Nonexistent\n")
        config = make_config(tmp_path)
        events = []
        FakeAsyncHttpClient.instances.clear()

        with patch("docprobe.core.checker.AsyncHttpClient", FakeAsyncHttpClient):
            summary = check_blocking(config, on_event=events.append)

        assert summary.total == 3
        assert summary.supported_count == 2
        assert summary.unsupported_count == 1
        assert any(event.type == EventType.BATCH_COMPLETED for event in events)

    @pytest.mark.asyncio
    async def test_check_blocking_rejects_running_loop(self, tmp_path):
        """Test the sync wrapper refuses to run inside an event loop."""
        with pytest.raises(RuntimeError):
            check_blocking(make_config(tmp_path))
