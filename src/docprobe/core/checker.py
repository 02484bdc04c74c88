"""SupportChecker: wire configuration, HTTP client and batch components together."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Iterable
from types import TracebackType

from ..concurrency.admission import AdmissionController
from ..errors import ConfigurationError
from ..http import AsyncHttpClient, HttpClient
from ..models.config import ProbeConfig
from ..models.events import EventEmitter
from ..models.items import BatchSummary, WorkItem
from .collector import PartitionWriter, ResultCollector
from .driver import BatchDriver
from .items import load_work_items
from .probe import Prober

logger = logging.getLogger(__name__)


class SupportChecker:
    """
    Primary API: check which ids a documentation site serves.

    Example:
        config = ProbeConfig(input_file=Path("languages.txt"), max_concurrent=20)

        async with SupportChecker(config, emit=print) as checker:
            summary = await checker.run()

        print(summary.to_dict())
        print(checker.supported)
    """

    def __init__(
        self,
        config: ProbeConfig,
        http_client: HttpClient | None = None,
        emit: EventEmitter | None = None,
    ) -> None:
        """
        Initialize the checker.

        Args:
            config: Batch configuration
            http_client: Optional client to use instead of an AsyncHttpClient
                         built from config.network (the caller owns its lifecycle)
            emit: Optional callback receiving every ProbeEvent
        """
        self.config = config
        self._emit = emit
        self._external_client = http_client
        self._http_client: HttpClient | None = http_client
        self._owned_client: AsyncHttpClient | None = None
        self._collector: ResultCollector | None = None

    @property
    def supported(self) -> tuple[str, ...]:
        """Supported partition of the last run."""
        return self._collector.supported if self._collector else ()

    @property
    def unsupported(self) -> tuple[str, ...]:
        """Unsupported partition of the last run."""
        return self._collector.unsupported if self._collector else ()

    async def __aenter__(self) -> SupportChecker:
        """Enter async context and create the HTTP client if needed."""
        if self._external_client is None:
            network = self.config.network
            self._owned_client = AsyncHttpClient(
                user_agent=network.user_agent,
                proxy=network.proxy,
                default_timeout=network.timeout,
                connection_limit=max(self.config.max_concurrent, 10),
            )
            await self._owned_client.__aenter__()
            self._http_client = self._owned_client
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close the HTTP client we created."""
        if self._owned_client:
            await self._owned_client.__aexit__(exc_type, exc_val, exc_tb)
            self._owned_client = None
            self._http_client = None

    async def run(self, items: Iterable[WorkItem] | None = None) -> BatchSummary:
        """
        Run one batch.

        Args:
            items: Work items to probe. If None, config.input_file is loaded.

        Returns:
            BatchSummary for the completed batch

        Raises:
            InputFileError: If the input file cannot be read
            ConfigurationError: If max_concurrent is invalid or an output file cannot be opened
        """
        if self._http_client is None:
            raise RuntimeError("SupportChecker not initialized. Use 'async with' context manager.")

        skipped_lines = 0
        if items is None:
            parsed = load_work_items(self.config.input_file, emit=self._emit)
            work_items = parsed.items
            skipped_lines = len(parsed.skipped)
        else:
            work_items = list(items)

        # Fails before any output file is touched
        admission = AdmissionController(self.config.max_concurrent)

        output = self.config.output
        supported_writer = PartitionWriter(output.supported_file, append=output.append)
        unsupported_writer = PartitionWriter(output.unsupported_file, append=output.append)

        # Both files must open before either is truncated
        try:
            supported_writer.open()
            unsupported_writer.open()
            supported_writer.reset()
            unsupported_writer.reset()
        except OSError as e:
            supported_writer.close()
            unsupported_writer.close()
            raise ConfigurationError(f"Cannot open output file: {e}") from e
        logger.debug(f"Writing results to {output.supported_file} and {output.unsupported_file}")

        try:
            self._collector = ResultCollector(
                supported_writer=supported_writer,
                unsupported_writer=unsupported_writer,
                total=len(work_items),
                emit=self._emit,
            )
            prober = Prober(
                self._http_client,
                base_url=self.config.base_url,
                timeout=self.config.network.timeout,
                method=self.config.network.method,
            )
            driver = BatchDriver(prober, self._collector, admission, emit=self._emit)
            summary = await driver.run(work_items)
        finally:
            supported_writer.close()
            unsupported_writer.close()

        return dataclasses.replace(summary, skipped_lines=skipped_lines)


def check_blocking(
    config: ProbeConfig,
    on_event: EventEmitter | None = None,
) -> BatchSummary:
    """
    Blocking batch run with optional event callback.

    WARNING: Do not call from within an existing event loop. Use the async
    SupportChecker API instead.

    Example:
        summary = check_blocking(ProbeConfig(input_file=Path("languages.txt")))
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("check_blocking() called from async context. Use 'async with SupportChecker()' instead.")

    async def _run() -> BatchSummary:
        async with SupportChecker(config, emit=on_event) as checker:
            return await checker.run()

    return asyncio.run(_run())
