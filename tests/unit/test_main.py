from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import psycopg
import pytest
from psycopg_pool import PoolTimeout

from enricher.main import EXIT_CANCELLED, EXIT_FAILURE, EXIT_OK, main
from enricher.store.exceptions import StoreError
from enricher.worker.summary import RunSummary


@pytest.fixture(autouse=True)
def _no_signal_handlers() -> Iterator[None]:
    with patch("enricher.main._install_signal_handlers"):
        yield


@pytest.fixture()
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("SERP_API_KEY", "serp-test")
    monkeypatch.setenv("GENERATION_PROVIDER", "openai")
    return monkeypatch


class TestMain:
    def test_missing_credentials_exit_with_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "")
        monkeypatch.setenv("SERP_API_KEY", "")
        monkeypatch.setenv("GENERATION_PROVIDER", "openai")

        with patch("enricher.main.init_pool") as mock_init_pool:
            assert main(["enrich"]) == EXIT_FAILURE

        mock_init_pool.assert_not_called()

    def test_ingest_needs_no_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "")
        monkeypatch.setenv("SERP_API_KEY", "")
        ingest = MagicMock(return_value=RunSummary())

        with (
            patch("enricher.main.init_pool"),
            patch("enricher.main.close_pool"),
            patch("enricher.main.get_connection"),
            patch("enricher.main.create_schema"),
            patch.dict("enricher.main.COMMANDS", {"ingest": ingest}),
        ):
            assert main(["ingest"]) == EXIT_OK

        ingest.assert_called_once()

    def test_runs_enrich_by_default_and_closes_pool(self, env: pytest.MonkeyPatch) -> None:
        enrich = MagicMock(return_value=RunSummary())

        with (
            patch("enricher.main.init_pool") as mock_init_pool,
            patch("enricher.main.close_pool") as mock_close_pool,
            patch("enricher.main.get_connection"),
            patch("enricher.main.create_schema") as mock_create_schema,
            patch.dict("enricher.main.COMMANDS", {"enrich": enrich}),
        ):
            assert main([]) == EXIT_OK

        mock_init_pool.assert_called_once()
        mock_create_schema.assert_called_once()
        mock_close_pool.assert_called_once()
        enrich.assert_called_once()

    def test_cancelled_run_exits_130(self, env: pytest.MonkeyPatch) -> None:
        def cancelled_run(settings, store, http_client, cancel) -> RunSummary:
            cancel.set()
            return RunSummary()

        with (
            patch("enricher.main.init_pool"),
            patch("enricher.main.close_pool"),
            patch("enricher.main.get_connection"),
            patch("enricher.main.create_schema"),
            patch.dict("enricher.main.COMMANDS", {"format": cancelled_run}),
        ):
            assert main(["format"]) == EXIT_CANCELLED

    def test_pool_closed_when_command_raises(self, env: pytest.MonkeyPatch) -> None:
        failing = MagicMock(side_effect=RuntimeError("boom"))

        with (
            patch("enricher.main.init_pool"),
            patch("enricher.main.close_pool") as mock_close_pool,
            patch("enricher.main.get_connection"),
            patch("enricher.main.create_schema"),
            patch.dict("enricher.main.COMMANDS", {"enrich": failing}),
            pytest.raises(RuntimeError),
        ):
            main(["enrich"])

        mock_close_pool.assert_called_once()

    def test_store_outage_exits_with_failure(self, env: pytest.MonkeyPatch) -> None:
        with (
            patch("enricher.main.init_pool"),
            patch("enricher.main.close_pool") as mock_close_pool,
            patch("enricher.main.get_connection"),
            patch("enricher.main.create_schema"),
            patch("enricher.main.PostgresDocumentStore") as mock_store_cls,
            patch("enricher.main.Log") as mock_log,
        ):
            mock_store_cls.return_value.find_pending.side_effect = StoreError(
                "Failed to load blogs: connection refused"
            )
            assert main(["enrich"]) == EXIT_FAILURE

        mock_close_pool.assert_called_once()
        mock_log.error.assert_called_once()
        assert "connection refused" in mock_log.error.call_args.args[0]

    def test_unreachable_database_exits_with_failure(self, env: pytest.MonkeyPatch) -> None:
        enrich = MagicMock(return_value=RunSummary())

        with (
            patch("enricher.main.init_pool"),
            patch("enricher.main.close_pool") as mock_close_pool,
            patch("enricher.main.get_connection"),
            patch(
                "enricher.main.create_schema",
                side_effect=psycopg.OperationalError("connection refused"),
            ),
            patch.dict("enricher.main.COMMANDS", {"enrich": enrich}),
        ):
            assert main(["enrich"]) == EXIT_FAILURE

        enrich.assert_not_called()
        mock_close_pool.assert_called_once()

    def test_pool_timeout_exits_with_failure(self, env: pytest.MonkeyPatch) -> None:
        with (
            patch("enricher.main.init_pool"),
            patch("enricher.main.close_pool"),
            patch(
                "enricher.main.get_connection",
                side_effect=PoolTimeout("couldn't get a connection after 30.00 sec"),
            ),
        ):
            assert main(["format"]) == EXIT_FAILURE
