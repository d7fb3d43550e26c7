#!/usr/bin/env python3
"""Reset the database to demo data: two users, two bots with documents, leads and one conversation.
Usage (from backend/, with DATABASE_URL set): python scripts/seed.py

Login afterwards with admin@example.com / admin123 or user@example.com / user123."""
import asyncio
import logging
import sys
from datetime import datetime, timedelta

from sqlalchemy import delete

from app.core.auth import hash_password
from app.db.session import async_session_maker, engine, init_db
from app.models import Bot, Conversation, Document, Lead, Message, User

logger = logging.getLogger("seed")

DOCUMENTS = {
    "E-commerce Assistant": [
        (
            "Return Policy",
            "Returns are accepted within 30 days of purchase. Items must be unused and in original "
            "packaging. Refunds are processed within 5-7 business days after we receive the item.\n\n"
            "Final sale items, customized products and gift cards cannot be returned.",
        ),
        (
            "Shipping Information",
            "Standard (5-7 business days): $4.99\nExpress (2-3 business days): $9.99\n"
            "Overnight (1 business day): $19.99\n\nFree shipping on orders over $50. "
            "Orders placed after 2 PM ship the next business day.",
        ),
        (
            "Product Catalog",
            "Electronics, clothing, and home & garden. All products come with a 1-year warranty "
            "and a 30-day satisfaction guarantee.",
        ),
    ],
    "Support Bot": [
        (
            "Account Management",
            "Update your profile under Settings. Reset a forgotten password from the login page; "
            "a reset link is sent to your email. We recommend enabling two-factor authentication.",
        ),
        (
            "Troubleshooting Guide",
            "Login problems: clear cache and cookies or reset your password.\n"
            "Payment issues: verify card details or try another payment method.\n"
            "Page not loading: refresh, check the connection or try another browser.",
        ),
        (
            "Contact Information",
            "Email: support@example.com\nPhone: 1-800-123-4567\nLive chat: 24/7\n"
            "Business hours: Mon-Fri 9 AM - 6 PM EST, Sat 10 AM - 4 PM EST.",
        ),
    ],
}

CONVERSATION = [
    ("user", "What is your return policy?"),
    ("assistant", "Returns are accepted within 30 days of purchase. Would you like to know how to start one?"),
    ("user", "Yes, how do I start a return?"),
    (
        "assistant",
        "Contact support with your order number, ship the item back with our prepaid label, "
        "and the refund follows within 5-7 business days.",
    ),
]


async def seed() -> None:
    await init_db()
    async with async_session_maker() as session:
        for model in (Message, Conversation, Lead, Document, Bot, User):
            await session.execute(delete(model))

        admin = User(
            email="admin@example.com", name="Admin User", password_hash=hash_password("admin123"), role="admin"
        )
        regular = User(
            email="user@example.com", name="John Doe", password_hash=hash_password("user123"), role="user"
        )
        session.add_all([admin, regular])
        await session.flush()

        shop = Bot(
            name="E-commerce Assistant",
            system_prompt=(
                "You are a helpful e-commerce assistant. Help customers find products, track orders, "
                "and answer questions about shipping and returns. Be friendly and professional."
            ),
            welcome_message="Hi! How can I help you with your shopping today?",
            user_id=regular.id,
        )
        support = Bot(
            name="Support Bot",
            system_prompt=(
                "You are a customer support specialist. Help users troubleshoot issues, answer technical "
                "questions, and escalate complex problems when needed. Be patient and thorough."
            ),
            welcome_message="Hello! I am here to help you. What can I assist you with?",
            user_id=regular.id,
        )
        session.add_all([shop, support])
        await session.flush()

        for bot in (shop, support):
            for title, content in DOCUMENTS[bot.name]:
                session.add(Document(bot_id=bot.id, title=title, content=content))

        session.add_all(
            [
                Lead(
                    bot_id=shop.id,
                    sender_id="visitor-abc123",
                    name="Sarah Johnson",
                    email="sarah@example.com",
                    phone="+1234567890",
                    extra={"source": "widget", "referrer": "google"},
                ),
                Lead(
                    bot_id=shop.id,
                    sender_id="visitor-def456",
                    name="Mike Smith",
                    email="mike@example.com",
                    extra={"source": "widget", "referrer": "facebook"},
                ),
                Lead(bot_id=support.id, sender_id="user-xyz789", extra={"source": "widget"}),
            ]
        )

        conversation = Conversation(bot_id=shop.id, sender_id="visitor-abc123", title="Return inquiry")
        session.add(conversation)
        await session.flush()
        started = datetime.utcnow()
        for i, (role, content) in enumerate(CONVERSATION):
            session.add(
                Message(
                    conversation_id=conversation.id,
                    role=role,
                    content=content,
                    created_at=started + timedelta(seconds=i),
                )
            )
        await session.commit()
    logger.info("Seeded 2 users, 2 bots, 6 documents, 3 leads, 1 conversation with 4 messages")


async def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    try:
        await seed()
    finally:
        await engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
