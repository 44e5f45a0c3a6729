import asyncio
import sys
from loguru import logger

from flowgraph.config import ConfigManager
from flowgraph.editor import create_editor
from flowgraph.logging import setup_logging


async def async_main(config_path=None, seconds: float = 3.5):
    config = ConfigManager(config_path)
    setup_logging(config.data.logging.debug_mode, config.data.logging.log_dir)

    print("--- 1. Create editor ---")
    session = await create_editor(
        lambda text: logger.info(f"[Log] {text}"),
        config.data,
        on_error=lambda e: logger.warning(f"[Host] pass failed: {e}"),
    )
    print(f"Catalog: {session.catalog.names()}")

    print("--- 2. Let the scheduler tick ---")
    await asyncio.sleep(seconds)

    print("--- 3. Edit the text control ---")
    text_node = next(n for n in session.graph if n.node_type == "Text")
    text_node.get_control("value").set_value("hello")
    await asyncio.sleep(seconds)

    print("--- 4. Cleanup ---")
    await session.destroy()
    print(f"Passes run: {session.scheduler.pass_count}")


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    asyncio.run(async_main(config_path))


if __name__ == "__main__":
    main()
