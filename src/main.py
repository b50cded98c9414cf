import asyncio
import os
import sys
import logging
from pathlib import Path
from dotenv import load_dotenv

from src.infrastructure.github_client import GitHubRestClient
from src.infrastructure.stackexchange_client import StackExchangeClient
from src.application.stats_service import StatsService
from src.application.report_service import ReportService

# Configure logging
logging.basicConfig(
    level=logging.INFO, 
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

async def main():
    # Load environment variables from .env file
    load_dotenv()

    # Get GitHub token and report directory from environment variables
    github_token = os.getenv("GITHUB_TOKEN")
    output_dir = Path(os.getenv("REPORT_OUTPUT_DIR", "."))

    if not github_token:
        logger.warning("GITHUB_TOKEN is not set; GitHub requests will be unauthenticated.")

    # Initialize the API clients and the stats service
    stats_service = StatsService(
        github_client=GitHubRestClient(token=github_token),
        stackexchange_client=StackExchangeClient(),
    )
    report_service = ReportService(stats_service=stats_service, output_dir=output_dir)

    try:
        await report_service.generate_report()
    except KeyboardInterrupt:
        logger.info("Report generation interrupted by user. Exiting.")
    except Exception as e:
        logger.exception(f"Error generating report: {e}")
        sys.exit(1)

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
