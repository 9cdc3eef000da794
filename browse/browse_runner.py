"""Browse runner entry point.

Opens a cursor on the configured backend and walks forward page by page,
logging what a record table would show.

Usage:
    python -m browse.browse_runner

Environment:
    CURSOR_ENGINE      transport engine, e.g. "salesforce"
    BROWSE_VARIANT     "standard" or "advancing" (default "advancing")
    BROWSE_MAX_PAGES   number of pages to visit (default 5)
"""

import asyncio

from pager.clients.cursor.CursorTransportInterface import CursorTransportInterface
from pager.clients.cursor.CursorTransportManager import CursorTransportManager
from pager.cursor.AdvancingIndexCursorClient import AdvancingIndexCursorClient
from pager.cursor.PageCursorClientInterface import PageCursorClientInterface
from pager.cursor.StandardCursorClient import StandardCursorClient
from pager.helper.HelperConfig import HelperConfig
from pager.logging.logging_setup import ColorLogger, setup_logging

VARIANTS = {
    "standard": StandardCursorClient,
    "advancing": AdvancingIndexCursorClient,
}


def build_cursor_client(config: HelperConfig, transport: CursorTransportInterface) -> PageCursorClientInterface:
    """Instantiate the cursor client selected by BROWSE_VARIANT.

    Raises:
        ValueError: If the variant is unknown.
    """
    variant = config.get_string_val("BROWSE_VARIANT", default="advancing").lower()
    client_class = VARIANTS.get(variant)
    if client_class is None:
        raise ValueError(f"Unsupported browse variant '{variant}'. Expected one of: {', '.join(VARIANTS)}")
    return client_class(helper_config=config, transport=transport)


async def browse(client: PageCursorClientInterface, max_pages: int, logger: ColorLogger) -> int:
    """Initialize the client and move forward until max_pages were shown or no next page exists.

    Returns:
        int: The number of pages shown.
    """
    await client.initialize()
    pages_shown = 0
    while client.error_message is None:
        view = client.get_view_state()
        pages_shown += 1
        logger.info("%s (%s)", view.page_info, view.record_count_info, color="cyan")
        for offset, record in enumerate(view.records, start=view.row_number_offset + 1):
            logger.info("%4d  %s | %s | %s", offset, record.Name or "-", record.Industry or "-", record.Phone or "-")
        deleted_rows_info = getattr(view, "deleted_rows_info", None)
        if deleted_rows_info:
            logger.warning(deleted_rows_info, color="yellow")
        if view.is_next_disabled or pages_shown >= max_pages:
            break
        previous_page = client.current_page
        await client.go_next()
        if client.current_page == previous_page:
            break

    if client.error_message:
        logger.error("Browsing stopped: %s", client.error_message)
    return pages_shown


async def main() -> None:
    """Browse the configured backend."""
    logger = setup_logging()
    config = HelperConfig(logger=logger)

    transport = CursorTransportManager(helper_config=config).get_transport()
    client = build_cursor_client(config, transport)
    max_pages = int(config.get_number_val("BROWSE_MAX_PAGES", default=5))

    try:
        await transport.boot()
        await transport.do_healthcheck()
        pages = await browse(client, max_pages, logger)
        logger.info("Browsed %d page(s).", pages, color="green")
    finally:
        await transport.close()


if __name__ == "__main__":
    asyncio.run(main())
