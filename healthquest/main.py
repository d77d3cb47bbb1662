"""Main entry point: wires the engine, reports status and shuts down"""
import logging
import asyncio
from healthquest.config import validate_config, DATA_PATH, LOG_LEVEL
from healthquest.services.container import create_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Load persisted progress and log where the user stands"""
    container = None
    try:
        logger.info("Validating configuration...")
        validate_config()

        container = create_container(DATA_PATH)
        service = container.gamification_service
        state = service.snapshot()

        user = state["user"]
        logger.info(
            f"User '{user['name'] or 'new adventurer'}': level {user['current_level']}, "
            f"{user['total_experience']} XP, {len(user['achievements'])} achievements"
        )
        logger.info(
            f"Quest: current level {state['current_level']}, "
            f"{state['total_progress']:.0%} of levels completed"
        )
        logger.info(
            f"Today: {state['today']['active_minutes']} active minutes, "
            f"streak {state['today']['weekly_streak']} days"
        )

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
    finally:
        if container:
            container.shutdown()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
