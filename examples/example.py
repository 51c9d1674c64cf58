"""Example usage of the Driptyard admin Python SDK."""
# Copyright (c) 2025 Driptyard. All rights reserved.

import asyncio
import logging
import os

from driptyard_admin import (
    ApplySpotlightRequest,
    Confirmation,
    DriptyardAdminClient,
    DriptyardAdminError,
    LoginError,
    configure_logging,
)
from driptyard_admin.models import format_change

logger = logging.getLogger(__name__)


async def main() -> None:
    """Execute main example function."""
    configure_logging()

    # Reads DRIPTYARD_ADMIN_* settings from the environment or .env
    async with DriptyardAdminClient.from_settings() as client:
        # Example 1: Sign in, or pick up an earlier session
        logger.info("=== Login Example ===")

        user = await client.auth.restore_session()
        if user is None:
            try:
                session = await client.auth.login(
                    os.environ.get("DRIPTYARD_ADMIN_EMAIL", "admin@driptyard.com"),
                    os.environ.get("DRIPTYARD_ADMIN_PASSWORD", "password"),
                )
            except LoginError as e:
                logger.error("Login failed: %s", e.message)
                return
            user = session.user
        logger.info("Welcome, %s!", user.name)

        # Example 2: Dashboard counters
        logger.info("=== Dashboard Example ===")

        stats = await client.admin.get_overview_stats()
        logger.info(
            "%s users (%s), %s flagged listings",
            stats.total_users,
            format_change(stats.total_users_change),
            stats.flagged_content_count,
        )

        # Example 3: Browse flagged listings
        logger.info("=== Listings Example ===")

        products = client.product_list()
        await products.set_filter("status", "flagged")
        logger.info("Flagged listings %s", products.range_label)
        for product in products.items:
            logger.info("  #%s %s (%.2f)", product.id, product.title, product.price)

        # Example 4: Spotlight the first listing for a day
        logger.info("=== Spotlight Example ===")

        if products.items:
            product = products.items[0]
            dialog = Confirmation()
            dialog.open(product.id)
            result = await client.action_runner().run(
                "spotlight",
                product.id,
                lambda: client.products.apply_spotlight(
                    product.id, ApplySpotlightRequest(duration_hours=24)
                ),
                success_message="Spotlight applied",
                confirmation=dialog,
                on_success=products.refresh,
            )
            if result.ok:
                spotlight = await client.products.get_spotlight(product.id)
                logger.info("Next action: %s", spotlight.available_action)

        # Example 5: Recent audit log
        logger.info("=== Audit Log Example ===")

        try:
            actions = await client.admin.get_available_actions()
            logger.info("Known actions: %s", ", ".join(actions))
        except DriptyardAdminError as e:
            logger.warning("Could not load actions: %s", e.message)

        logs = client.log_list()
        await logs.load()
        for entry in logs.items:
            logger.info("  %s %s %s -> %s", entry.timestamp, entry.actor, entry.action, entry.target)

        await client.auth.logout()


if __name__ == "__main__":
    asyncio.run(main())
