"""
Deterministic sample-data generator.

Produces a dataset in the analysis input shape:
  - sellers        (id, first_name, last_name, plus start_date / position)
  - products       (sku, name, category, price, purchase_price)
  - purchase_records with 1-5 line items each; every line carries
    sale_price, quantity and a percentage discount, and the record's
    total_amount is the sum of its discounted lines
"""

import random
from datetime import date, timedelta

SEED = 42
START = date(2026, 1, 1)

FIRST_NAMES = ["Alexey", "Maria", "Ivan", "Olga", "Dmitry", "Elena", "Sergey", "Anna"]
LAST_NAMES = ["Petrov", "Ivanova", "Smirnov", "Kuznetsova", "Popov", "Volkova", "Sokolov", "Orlova"]
CATEGORIES = ["electronics", "home", "garden", "toys", "apparel", "books"]
DISCOUNTS = [0, 0, 0, 5, 10, 15, 25]


def _sellers(rng: random.Random, count: int) -> list[dict]:
    return [
        {
            "id": f"seller_{n}",
            "first_name": rng.choice(FIRST_NAMES),
            "last_name": rng.choice(LAST_NAMES),
            "start_date": str(START - timedelta(days=rng.randint(30, 900))),
            "position": "Senior Seller" if n == 1 else "Seller",
        }
        for n in range(1, count + 1)
    ]


def _products(rng: random.Random, count: int) -> list[dict]:
    products = []
    for n in range(1, count + 1):
        price = round(rng.uniform(5, 500), 2)
        products.append({
            "sku": f"SKU_{n:03d}",
            "name": f"Product {n}",
            "category": rng.choice(CATEGORIES),
            "price": price,
            # 40-80 % margin on the catalog price
            "purchase_price": round(price * rng.uniform(0.2, 0.6), 2),
        })
    return products


def build_sample_dataset(
    seed: int = SEED,
    sellers: int = 5,
    products: int = 40,
    records: int = 300,
) -> dict:
    rng = random.Random(seed)

    seller_rows = _sellers(rng, sellers)
    product_rows = _products(rng, products)

    purchase_records = []
    for n in range(1, records + 1):
        seller = rng.choice(seller_rows)
        items = []
        for product in rng.sample(product_rows, rng.randint(1, min(5, len(product_rows)))):
            quantity = rng.randint(1, 5)
            discount = rng.choice(DISCOUNTS)
            items.append({
                "sku": product["sku"],
                "quantity": quantity,
                "sale_price": product["price"],
                "discount": discount,
            })
        total = sum(i["sale_price"] * i["quantity"] * (1 - i["discount"] / 100) for i in items)
        purchase_records.append({
            "receipt_id": f"receipt_{n:05d}",
            "date": str(START + timedelta(days=rng.randint(0, 89))),
            "seller_id": seller["id"],
            "total_amount": round(total, 2),
            "items": items,
        })

    return {
        "sellers": seller_rows,
        "products": product_rows,
        "purchase_records": purchase_records,
    }
