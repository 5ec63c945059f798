#!/usr/bin/env python3
"""Walk through table setup, CRUD and queries on two small databases."""

import asyncio

from pydantic import BaseModel

from litedb import SQLiteManager, describe, field, get_logger, settings, setup_logging


class User(BaseModel):
    """Application user."""

    id: int = 0
    name: str


class Product(BaseModel):
    """Catalog product."""

    id: int = 0
    name: str
    price: float


USER = describe(User)
PRODUCT = describe(Product)


async def main() -> None:
    """Run the demonstration."""
    setup_logging(level=settings.log_level)
    logger = get_logger(__name__)

    user_db = SQLiteManager.get_instance("users.db")
    product_db = SQLiteManager.get_instance("products.db")

    # 1. Ensure / reset tables
    await user_db.ensure_table_exists(USER)
    await product_db.ensure_table_exists(PRODUCT)
    await user_db.reset_table(USER)
    await product_db.reset_table(PRODUCT)

    # 2. Insert single records
    await user_db.insert(User(name="Alice"))
    await product_db.insert(Product(name="Laptop", price=1200))

    # 3. Insert batches
    await user_db.insert([User(name="Bob"), User(name="Charlie")])
    await product_db.insert(
        [Product(name="Phone", price=800), Product(name="Tablet", price=600)]
    )

    # 4. Query all
    users = await SQLiteManager.for_(USER, "users.db").to_list()
    products = await SQLiteManager.for_(PRODUCT, "products.db").to_list()
    logger.info(f"Users count: {len(users)}")
    logger.info(f"Products count: {len(products)}")

    # 5. Filtered query
    alice = await (
        SQLiteManager.for_(USER, "users.db")
        .where(field("name") == "Alice")
        .first_or_default()
    )
    logger.info(f"Found: {alice.name if alice else None}")

    # 6. Update single
    if alice is not None:
        alice.name = "Alice Updated"
        await user_db.update(alice)

    # 7. Update batch
    for user in users:
        user.name += " Batch"
    await user_db.update(users)

    # 8. Delete single
    if alice is not None:
        await user_db.delete(alice)

    # 9. Delete batch
    batch_users = (
        await SQLiteManager.for_(USER, "users.db")
        .where(field("name").contains("Batch"))
        .to_list()
    )
    await user_db.delete(batch_users)

    # 10. Ordered query
    sorted_products = (
        await SQLiteManager.for_(PRODUCT, "products.db")
        .order_by_descending("price")
        .to_list()
    )
    logger.info("Products sorted by price:")
    for product in sorted_products:
        logger.info(f"{product.name} - {product.price}")

    # 11. Clear tables
    await user_db.reset_table(USER)
    await product_db.reset_table(PRODUCT)

    logger.info("litedb demo finished")


if __name__ == "__main__":
    asyncio.run(main())
