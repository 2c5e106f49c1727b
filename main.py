import asyncio
import sys
from pydantic import ValidationError
from add_to_project.config import get_settings
from add_to_project.utils.logger import get_logger
from add_to_project.workflow import AddToProjectWorkflow

logger = get_logger(__name__)


async def main() -> int:
    """メインエントリーポイント"""
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid action inputs: {e}")
        return 1

    workflow = AddToProjectWorkflow(settings)
    result = await workflow.execute()

    if result.get("error"):
        return 1

    if result.get("skipped"):
        logger.info("Event filtered out by labels, nothing to do")
    else:
        logger.info(f"Added item {result['item_id']} to {settings.PROJECT_URL}")
    return 0


def run() -> None:
    """コンソールスクリプト用のエントリーポイント"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Application stopped")
        sys.exit(130)


if __name__ == "__main__":
    run()
