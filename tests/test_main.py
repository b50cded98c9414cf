import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from src import main as entrypoint


class TestMain(unittest.IsolatedAsyncioTestCase):
    async def test_unhandled_error_exits_with_status_one(self) -> None:
        with patch.object(entrypoint, "load_dotenv"), \
                patch.object(entrypoint.ReportService, "generate_report", new_callable=AsyncMock,
                             side_effect=OSError("disk full")):
            with self.assertRaises(SystemExit) as ctx:
                await entrypoint.main()

        self.assertEqual(ctx.exception.code, 1)

    async def test_success_does_not_exit(self) -> None:
        with patch.object(entrypoint, "load_dotenv"), \
                patch.dict("os.environ", {"GITHUB_TOKEN": "t", "REPORT_OUTPUT_DIR": "reports"}), \
                patch.object(entrypoint.ReportService, "generate_report", new_callable=AsyncMock,
                             return_value=Path("reports/github-stats.md")) as generate:
            await entrypoint.main()

        generate.assert_awaited_once()
