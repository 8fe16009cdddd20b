"""Single-pass enrichment run.

Wires cache, transport, providers and analyzers from InternalConfig, walks
the entities in discovery order and folds per-entity results into the
output table. Manages logging, lifecycle and the end-of-run summary.
"""

import os
import time
import logging
from pathlib import Path
from typing import Callable, List, Optional

from caseclimate.analysis.growth import GrowthRateAnalyzer
from caseclimate.analysis.weather import WeatherAggregator, calendar_window
from caseclimate.cache.fetcher import CachedFetcher
from caseclimate.cache.kv_store import SQLiteKeyValueCache
from caseclimate.contracts import CacheUnavailable, FailurePolicy, assert_output_records
from caseclimate.models import EnrichedRecord
from caseclimate.pipeline.enrichment import EntityEnrichmentPipeline
from caseclimate.pipeline.loader import discover_entities, load_time_series
from caseclimate.pipeline.writer import write_results
from caseclimate.providers.countries import CapitalResolver, RestCountriesLookup
from caseclimate.providers.geocoder import GoogleGeocoder
from caseclimate.providers.http import HttpTransport
from caseclimate.providers.weather import DarkSkyWeatherProvider
from caseclimate.setup_directories import get_result_path

__all__ = ['PipelineOrchestrator']

logger = logging.getLogger(__name__)

WEATHER_KEY_ENV = ("WEATHER_API_KEY", "DARK_SKY_KEY")
GEOCODER_KEY_ENV = ("GEOCODER_API_KEY", "API_KEY")


def _credential(configured: Optional[str], env_names) -> Optional[str]:
    if configured:
        return configured
    for name in env_names:
        value = os.environ.get(name)
        if value:
            return value
    return None


class PipelineOrchestrator:
    """Run the enrichment pipeline once over an input file.

    **Run Stages:**

    1. Load the time series (header contract, case floor) and discover
       entities in first-appearance order.
    2. For each entity, sequentially, ``EntityEnrichmentPipeline.process``
       returns Success or Failure. Failures are logged and omitted
       (``failure_policy="skip_entity"``) or re-raised (``"fail_fast"``).
    3. Successful records with any non-finite statistic are dropped.
    4. The remaining records are written to the result CSV.

    **Lookup Cache:**

    All remote lookups go through one CachedFetcher backed by a SQLite file
    under ``output_dirs["cache"]``. If the cache cannot be opened the run
    continues with live lookups only.

    **Logging:**

    All output goes to both console and ``logs/enrichment_pipeline.log``.
    Log level controlled via config.logging.level.

    Example usage::

        config = resolve_config(ParamConfig(), user_cfg, cli_cfg)
        output_dirs = setup_output_directories(config.base_dir)

        orch = PipelineOrchestrator(config, output_dirs)
        records = orch.run()
    """

    def __init__(self, config, output_dirs: dict,
                 transport: Optional[Callable] = None):
        """Initialize orchestrator.

        Parameters
        ----------
        config : InternalConfig
            Resolved runtime configuration.
        output_dirs : dict
            Directory paths from ``setup_output_directories()``; uses
            ``cache``, ``results`` and ``logs``.
        transport : callable, optional
            ``transport(LookupRequest) -> document``. Defaults to an
            HttpTransport built from config.http. Tests inject a fake.
        """
        self.config = config
        self.output_dirs = {k: Path(v) for k, v in output_dirs.items()}
        self.transport = transport

        self.cache = None
        self.fetcher = None
        self.records: List[EnrichedRecord] = []
        self.failed = {}
        self.dropped = []
        self._owns_transport = False
        self._start_time = None

    def _setup_logging(self):
        """Configure root logger with file and console handlers."""
        log_level = getattr(logging, self.config.logging.level.upper(), logging.INFO)

        log_dir = self.output_dirs.get("logs", Path("."))
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "enrichment_pipeline.log"

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_path)

    def _open_cache(self) -> Optional[SQLiteKeyValueCache]:
        if self.config.cache.db_path:
            db_path = Path(self.config.cache.db_path)
        else:
            db_path = self.output_dirs.get("cache", Path(".")) / self.config.cache.db_filename
        try:
            cache = SQLiteKeyValueCache(db_path)
        except CacheUnavailable as e:
            logger.warning("Lookup cache disabled, every lookup will be live: %s", e)
            return None
        logger.info("Lookup cache: %s (%d entries)", db_path, cache.count())
        return cache

    def _build_pipeline(self) -> EntityEnrichmentPipeline:
        cfg = self.config

        if self.transport is None:
            self.transport = HttpTransport(cfg.http.timeout_s, cfg.http.user_agent)
            self._owns_transport = True

        self.cache = self._open_cache()
        self.fetcher = CachedFetcher(self.cache, self.transport)

        weather_key = _credential(cfg.weather.api_key, WEATHER_KEY_ENV)
        geocoder_key = _credential(cfg.geocoder.api_key, GEOCODER_KEY_ENV)
        if not weather_key:
            logger.warning("No weather API key (set %s); uncached weather lookups will fail",
                           WEATHER_KEY_ENV[0])
        if not geocoder_key:
            logger.warning("No geocoder API key (set %s); uncached geocoding will fail",
                           GEOCODER_KEY_ENV[0])

        resolver = CapitalResolver(
            cfg.countries.capital_overrides,
            RestCountriesLookup(self.fetcher, cfg.countries.base_url),
        )
        geocoder = GoogleGeocoder(self.fetcher, cfg.geocoder.base_url, geocoder_key)
        provider = DarkSkyWeatherProvider(
            cfg.weather.base_url,
            api_key=weather_key,
            exclude=cfg.weather.exclude,
            temperature_unit=cfg.weather.temperature_unit,
        )
        window = calendar_window(cfg.weather.year, cfg.weather.month, cfg.weather.sample_hour)
        logger.info("Weather window: %d samples from %s", len(window), window[0].isoformat())

        return EntityEnrichmentPipeline(
            capital_resolver=resolver,
            geocoder=geocoder,
            growth_analyzer=GrowthRateAnalyzer(cfg.growth.min_total_cases),
            weather_aggregator=WeatherAggregator(provider, self.fetcher),
            window=window,
        )

    def output_path(self) -> Path:
        if self.config.output.path:
            return Path(self.config.output.path)
        return get_result_path(self.output_dirs, self.config.output.filename)

    def run(self, setup_logging: bool = True) -> List[EnrichedRecord]:
        """Run the pipeline to completion and write the result CSV.

        Parameters
        ----------
        setup_logging : bool, optional
            Install console and file handlers on the root logger (default
            True). Tests disable this to keep pytest's capture handlers.

        Returns
        -------
        list of EnrichedRecord
            Written records, in entity discovery order.

        Raises
        ------
        ValueError
            No input path configured.
        InputFormatError
            Input file has a missing or malformed header.
        OSError
            Input cannot be read or output cannot be written.
        EnrichmentError
            First entity failure, only with ``failure_policy="fail_fast"``.
        """
        if setup_logging:
            self._setup_logging()

        if not self.config.input.path:
            raise ValueError("No input file configured (INPUT_PATH or --input)")

        logger.info("=" * 60)
        logger.info("Starting Enrichment Pipeline")
        logger.info("=" * 60)
        self._start_time = time.time()

        try:
            pipeline = self._build_pipeline()
            time_series = load_time_series(self.config.input.path, self.config.input)
            entities = discover_entities(time_series)

            results = []
            total = len(entities)
            for i, entity in enumerate(entities, 1):
                logger.info("[%d/%d] %s", i, total, entity.id)
                result = pipeline.process(entity, time_series)
                if not result.ok:
                    self.failed[entity.id] = result.error
                    if self.config.pipeline.failure_policy == FailurePolicy.FAIL_FAST.value:
                        raise result.error
                    continue
                results.append(result.value)

            self.records = self._keep_finite(results)
            assert_output_records(self.records)
            write_results(self.records, self.output_path())
        finally:
            self.stop()

        return self.records

    def _keep_finite(self, records: List[EnrichedRecord]) -> List[EnrichedRecord]:
        kept = []
        for record in records:
            if record.is_finite():
                kept.append(record)
            else:
                self.dropped.append(record.entity_id)
                logger.warning("Dropping %s: non-finite statistics (median=%s, temp=%s, humidity=%s)",
                               record.entity_id, record.median, record.average_temp,
                               record.average_humidity)
        return kept

    def stop(self):
        """Log the run summary and release resources. Safe to call multiple times."""
        if self._start_time is not None:
            self._log_summary()
            self._start_time = None

        if self.cache is not None:
            self.cache.close()
            self.cache = None
        if self._owns_transport and self.transport is not None:
            self.transport.close()
            self.transport = None
            self._owns_transport = False

    def _log_summary(self):
        elapsed = time.time() - self._start_time
        logger.info("=" * 60)
        logger.info("Run complete in %.1fs", elapsed)
        logger.info("Records written: %d", len(self.records))
        logger.info("Entities failed: %d", len(self.failed))
        for entity_id, error in self.failed.items():
            logger.info("  %s: %s", entity_id, error)
        if self.dropped:
            logger.info("Entities dropped (non-finite): %s", ", ".join(self.dropped))
        if self.fetcher is not None:
            stats = self.fetcher.stats()
            logger.info("Lookups: %d cache hits, %d live, %d failed",
                        stats["hits"], stats["misses"], stats["failures"])
        if self.cache is not None:
            try:
                cache_stats = self.cache.get_statistics()
                logger.info("Cache entries: %d", cache_stats["entries"])
            except CacheUnavailable as e:
                logger.warning("Cache statistics unavailable: %s", e)
        logger.info("=" * 60)
