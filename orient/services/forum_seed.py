from __future__ import annotations

import logging

from orient.services.content_repository import ForumRepository

logger = logging.getLogger(__name__)


# Starter FAQ shown on a fresh install. Titles are the identity used to skip re-seeding.
STARTER_QUESTIONS = [
    {
        "title": "How do I contact a vendor?",
        "body": "I found a product I like and want to reach out to the seller. How can I contact them?",
        "authorName": "Sarah Johnson",
        "answers": [
            {
                "body": (
                    "To contact a vendor on Orient, open any product listing and scroll down to the "
                    "\"Contact Vendor\" section. The vendor's phone number and email address are shown there. "
                    "You can call them directly or send an email to ask about the product, discuss pricing "
                    "or arrange pickup. No account or login is required!"
                ),
                "authorName": "Orient Support Team",
            },
        ],
    },
    {
        "title": "How do I post an item for sale?",
        "body": "I am a vendor and want to list my products on Orient. What are the steps to upload an item?",
        "authorName": "Farm Owner Mike",
        "answers": [
            {
                "body": (
                    "Go to the home page and click the \"Post Item\" button at the top. Fill in your vendor name, "
                    "item name, description, price, category, contact phone, contact email and a password. "
                    "You can also upload a photo of your product. Keep the password safe: you will need it "
                    "later to delete your listing. Click \"Post Listing\" and your item is live immediately."
                ),
                "authorName": "Farmer Joe",
            },
        ],
    },
    {
        "title": "How do I browse products on Orient?",
        "body": "I am new to Orient and want to see what products are available. How do I navigate the marketplace?",
        "authorName": "New User",
        "answers": [
            {
                "body": (
                    "The home page shows every available product as a card with the item name, vendor name, "
                    "price and category. Scroll through the listings and tap a card to open the full product "
                    "page with the description and the vendor's contact information."
                ),
                "authorName": "Happy Customer",
            },
        ],
    },
    {
        "title": "Can I filter products by category?",
        "body": "I am only interested in certain types of products. Is there a way to filter what I see?",
        "authorName": "Busy Shopper",
        "answers": [
            {
                "body": (
                    "Yes! At the top of the home page there is a \"Filter by Category\" dropdown. Choose "
                    "Vegetables, Fruits, Grains or Livestock and the page only shows products from that "
                    "category. Pick \"All Categories\" to see everything again."
                ),
                "authorName": "Tech Helper",
            },
        ],
    },
    {
        "title": "Do I need to create an account to use Orient?",
        "body": "I want to know if I need to sign up or register to browse and buy products.",
        "authorName": "Anonymous User",
        "answers": [
            {
                "body": (
                    "No, you do not need an account. Buyers can browse all products and contact vendors "
                    "without signing up. Vendors can post products without an account too; they only set a "
                    "password on the listing so they can delete it later."
                ),
                "authorName": "Orient Team",
            },
        ],
    },
    {
        "title": "What is Orient?",
        "body": "I just heard about Orient. Can someone explain what this platform is for?",
        "authorName": "Curious Visitor",
        "answers": [
            {
                "body": (
                    "Orient is a mobile-friendly marketplace that connects farmers and food vendors with buyers "
                    "in their community. Local producers showcase fresh vegetables, fruits, grains and "
                    "livestock, and buyers browse prices and descriptions and contact vendors directly. "
                    "There is no complicated signup process."
                ),
                "authorName": "Platform Admin",
            },
        ],
    },
    {
        "title": "How do I edit or delete my listing?",
        "body": "I posted an item but need to make changes or remove it. How can I do that?",
        "authorName": "Vendor Anna",
        "answers": [
            {
                "body": (
                    "Open the product page for the item you posted and click the \"Delete Listing\" button at "
                    "the bottom. Enter your vendor name and the password you set when you created the listing, "
                    "and the listing is removed permanently. To change a listing, delete it and post a new one "
                    "with the updated information."
                ),
                "authorName": "Vendor Support",
            },
        ],
    },
    {
        "title": "Are the products on Orient locally sourced?",
        "body": "I prefer to buy local. Can I find farmers and food vendors from my area on Orient?",
        "authorName": "Local Food Supporter",
        "answers": [
            {
                "body": (
                    "Yes! Products on Orient come from local vendors, farmers and small food producers in your "
                    "community. Use the vendor's contact details on a product page to ask where their produce "
                    "comes from and about delivery or pickup options."
                ),
                "authorName": "Local Food Advocate",
            },
        ],
    },
    {
        "title": "How do I contact Orient Expo?",
        "body": "I have a question or need help with something on Orient. How can I reach out to the Orient team?",
        "authorName": "Community Member",
        "answers": [
            {
                "body": (
                    "Ask us right here in the Q&A section! Click \"Ask Question\" and include \"for orient\" in "
                    "the title so we know it is meant for our team. We answer as soon as possible. This is the "
                    "best way to get help, report issues or share feedback."
                ),
                "authorName": "Orient Expo Team",
            },
        ],
    },
]


def seed_questions(repo: ForumRepository, entries: list[dict] | None = None) -> dict:
    """Insert starter questions and their answers, skipping titles that already exist."""
    entries = STARTER_QUESTIONS if entries is None else entries
    added_questions = 0
    added_answers = 0
    skipped = 0
    for entry in entries:
        if repo.find_question_by_title(entry["title"]) is not None:
            skipped += 1
            continue
        question = repo.create_question(
            {"title": entry["title"], "body": entry["body"], "authorName": entry["authorName"]}
        )
        added_questions += 1
        for answer in entry.get("answers") or []:
            repo.create_answer(
                {"questionId": question.id, "body": answer["body"], "authorName": answer["authorName"]}
            )
            added_answers += 1
    logger.info(
        "forum_seed_done questions=%s answers=%s skipped=%s",
        added_questions,
        added_answers,
        skipped,
    )
    return {"questions": added_questions, "answers": added_answers, "skipped": skipped}
