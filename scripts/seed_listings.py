#!/usr/bin/env python3
"""
Seed categories, sellers and listings with deterministic random data.

Features:
- Deterministic: fixed seed -> same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: prices depend on brand tier and condition, popularity
  skews toward older listings

Usage:
    python scripts/seed_listings.py
"""

from __future__ import annotations

import random
import sys
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from secondhand_lite.infra.db.models import CategoryRow, ListingRow, ProfileRow
from secondhand_lite.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42
NUM_SELLERS = 12
NUM_LISTINGS = 200
NOW = datetime(2026, 10, 1, tzinfo=timezone.utc)


# ==============================================================================
# Catalog Data
# ==============================================================================

# (name, slug, sort_order) -> subcategories as (name, slug)
CATEGORY_TREE = {
    ("Women", "women", 1): [("Dresses", "dresses"), ("Jackets", "womens-jackets"), ("Tops", "tops")],
    ("Men", "men", 2): [("Shirts", "shirts"), ("Jackets", "mens-jackets"), ("Jeans", "jeans")],
    ("Shoes", "shoes", 3): [("Sneakers", "sneakers"), ("Boots", "boots"), ("Heels", "heels")],
    ("Bags", "bags", 4): [("Backpacks", "backpacks"), ("Handbags", "handbags")],
}

BRAND_TIERS = {
    "high_street": {
        "brands": ["Zara", "H&M", "Mango", "Uniqlo", "Gap"],
        "base_price_min": Decimal("8"),
        "base_price_max": Decimal("45"),
    },
    "premium": {
        "brands": ["Levi's", "Nike", "Adidas", "Dr. Martens", "Carhartt"],
        "base_price_min": Decimal("30"),
        "base_price_max": Decimal("140"),
    },
    "luxury": {
        "brands": ["Gucci", "Prada", "Saint Laurent", "Burberry"],
        "base_price_min": Decimal("180"),
        "base_price_max": Decimal("1200"),
    },
}

ITEM_NOUNS = {
    "dresses": ["Midi Dress", "Slip Dress", "Wrap Dress"],
    "womens-jackets": ["Denim Jacket", "Trench Coat", "Puffer Jacket"],
    "tops": ["Linen Blouse", "Striped Tee", "Knit Sweater"],
    "shirts": ["Oxford Shirt", "Flannel Shirt", "Polo Shirt"],
    "mens-jackets": ["Denim Jacket", "Leather Jacket", "Bomber Jacket"],
    "jeans": ["Slim Jeans", "Straight Jeans", "Denim Skirt"],
    "sneakers": ["Running Sneakers", "Court Sneakers", "High-top Sneakers"],
    "boots": ["Chelsea Boots", "Combat Boots", "Ankle Boots"],
    "heels": ["Block Heels", "Strappy Sandals", "Pumps"],
    "backpacks": ["Canvas Backpack", "Leather Backpack"],
    "handbags": ["Tote Bag", "Crossbody Bag", "Shoulder Bag"],
}

ADJECTIVES = ["Blue", "Black", "Vintage", "Oversized", "Cropped", "Classic", "Washed", "Cream"]
CLOTHING_SIZES = ["XS", "S", "M", "L", "XL"]
SHOE_SIZES = ["37", "38", "39", "40", "41", "42", "43"]

# Condition -> price multiplier
CONDITIONS = {
    "new": Decimal("1.00"),
    "like-new": Decimal("0.85"),
    "good": Decimal("0.65"),
    "fair": Decimal("0.45"),
}

LOCATIONS = ["London", "Manchester", "Berlin", "Paris", "Madrid", "Milan", "Amsterdam"]
USERNAMES = ["mila", "theo", "ines", "omar", "lena", "kai", "rosa", "yusuf", "ada", "noah", "eva", "luca"]


# ==============================================================================
# Seed Generation
# ==============================================================================


def generate_categories() -> tuple[list[CategoryRow], list[tuple[CategoryRow, CategoryRow]]]:
    """Build parent rows and (parent, child) pairs."""
    rows: list[CategoryRow] = []
    pairs: list[tuple[CategoryRow, CategoryRow]] = []
    for (name, slug, sort_order), children in CATEGORY_TREE.items():
        parent = CategoryRow(id=uuid.uuid4(), name=name, slug=slug, sort_order=sort_order)
        rows.append(parent)
        for position, (child_name, child_slug) in enumerate(children, 1):
            child = CategoryRow(
                id=uuid.uuid4(),
                name=child_name,
                slug=child_slug,
                parent_id=parent.id,
                sort_order=position,
            )
            rows.append(child)
            pairs.append((parent, child))
    return rows, pairs


def generate_sellers() -> list[ProfileRow]:
    return [
        ProfileRow(
            id=uuid.uuid4(),
            username=username,
            full_name=username.capitalize(),
            is_verified=random.random() < 0.3,
        )
        for username in USERNAMES[:NUM_SELLERS]
    ]


def calculate_price(brand: str, condition: str) -> Decimal:
    """Random price inside the brand tier, discounted by condition, rounded to 0.50."""
    tier = next(t for t in BRAND_TIERS.values() if brand in t["brands"])
    base = Decimal(random.randint(int(tier["base_price_min"]), int(tier["base_price_max"])))
    price = base * CONDITIONS[condition]
    return max((price * 2).quantize(Decimal("1")) / 2, Decimal("1.00")).quantize(Decimal("0.01"))


def generate_listing(
    sellers: list[ProfileRow],
    pairs: list[tuple[CategoryRow, CategoryRow]],
) -> ListingRow:
    parent, child = random.choice(pairs)
    tier = random.choices(list(BRAND_TIERS), weights=[6, 3, 1], k=1)[0]
    brand = random.choice(BRAND_TIERS[tier]["brands"])
    condition = random.choices(list(CONDITIONS), weights=[1, 3, 4, 2], k=1)[0]
    title = f"{random.choice(ADJECTIVES)} {random.choice(ITEM_NOUNS[child.slug])}"
    size = random.choice(SHOE_SIZES) if parent.slug == "shoes" else random.choice(CLOTHING_SIZES)
    if parent.slug == "bags":
        size = None

    age_days = random.randint(0, 180)
    # Older listings have had more time to collect views and likes
    view_count = random.randint(0, 40) + age_days * random.randint(0, 5)
    like_count = random.randint(0, max(1, view_count // 8))

    return ListingRow(
        seller_id=random.choice(sellers).id,
        title=title,
        description=f"{brand} {title.lower()}, {condition.replace('-', ' ')} condition.",
        price=calculate_price(brand, condition),
        category_id=parent.id,
        subcategory_id=child.id,
        brand=brand,
        size=size,
        condition=condition,
        images=[],
        location=random.choice(LOCATIONS),
        status=random.choices(["active", "sold", "draft"], weights=[8, 1, 1], k=1)[0],
        view_count=view_count,
        like_count=like_count,
        is_negotiable=random.random() < 0.4,
        shipping_included=random.random() < 0.25,
        created_at=NOW - timedelta(days=age_days, minutes=random.randint(0, 1439)),
    )


def seed_listings(num_listings: int = NUM_LISTINGS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with categories, sellers and listings.

    Args:
        num_listings: Number of listings to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)

    print(f"Seeding database with {num_listings} listings (seed={seed})...")

    with get_session() as session:
        # Children before parents: listings reference categories and profiles
        print("Clearing existing data...")
        deleted = session.query(ListingRow).delete()
        session.query(CategoryRow).filter(CategoryRow.parent_id.is_not(None)).delete()
        session.query(CategoryRow).delete()
        session.query(ProfileRow).delete()
        print(f"   Deleted {deleted} existing listings")

        categories, pairs = generate_categories()
        sellers = generate_sellers()
        session.add_all(categories)
        session.add_all(sellers)
        session.flush()

        listings = [generate_listing(sellers, pairs) for _ in range(num_listings)]
        session.add_all(listings)
        session.flush()

        print(
            f"Seeded {len(categories)} categories, {len(sellers)} sellers "
            f"and {len(listings)} listings"
        )

        print("\nSample listings:")
        for i, listing in enumerate(listings[:5], 1):
            print(f"   {i}. {listing.title} ({listing.brand}, {listing.size}) - ${listing.price}")

        if len(listings) > 5:
            print(f"   ... and {len(listings) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_listings()
    except Exception as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
