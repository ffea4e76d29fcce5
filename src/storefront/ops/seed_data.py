"""Baseline catalog records inserted by ``storefront db seed``.

Identifiers are stable so re-running the seeder updates rows in place
instead of duplicating them. Each product names the category ids it is
connected to.
"""

from __future__ import annotations

from typing import Any

CATEGORIES: list[dict[str, Any]] = [
    {
        "id": "cat_shirts",
        "slug": "shirts",
        "name": "Shirts",
        "description": "Tees and long sleeves in soft organic cotton.",
    },
    {
        "id": "cat_hoodies",
        "slug": "hoodies",
        "name": "Hoodies",
        "description": "Heavyweight fleece for cold mornings.",
    },
    {
        "id": "cat_accessories",
        "slug": "accessories",
        "name": "Accessories",
        "description": "Caps, bags and everything in between.",
    },
    {
        "id": "cat_drinkware",
        "slug": "drinkware",
        "name": "Drinkware",
        "description": "Mugs and bottles for the desk.",
    },
]

PRODUCTS: list[dict[str, Any]] = [
    {
        "id": "prod_classic_tee",
        "slug": "classic-tee",
        "name": "Classic Tee",
        "description": "A relaxed crew neck tee with the store logo on the chest.",
        "price_cents": 2000,
        "currency": "USD",
        "image_url": "/images/classic-tee.png",
        "available_for_sale": True,
        "category_ids": ["cat_shirts"],
    },
    {
        "id": "prod_long_sleeve",
        "slug": "long-sleeve-tee",
        "name": "Long Sleeve Tee",
        "description": "Midweight jersey with ribbed cuffs.",
        "price_cents": 2800,
        "currency": "USD",
        "image_url": "/images/long-sleeve-tee.png",
        "available_for_sale": True,
        "category_ids": ["cat_shirts"],
    },
    {
        "id": "prod_zip_hoodie",
        "slug": "zip-hoodie",
        "name": "Zip Hoodie",
        "description": "Full zip fleece hoodie with kangaroo pockets.",
        "price_cents": 6000,
        "currency": "USD",
        "image_url": "/images/zip-hoodie.png",
        "available_for_sale": True,
        "category_ids": ["cat_hoodies"],
    },
    {
        "id": "prod_pullover_hoodie",
        "slug": "pullover-hoodie",
        "name": "Pullover Hoodie",
        "description": "Brushed-back pullover with an embroidered wordmark.",
        "price_cents": 5500,
        "currency": "USD",
        "image_url": "/images/pullover-hoodie.png",
        "available_for_sale": False,
        "category_ids": ["cat_hoodies"],
    },
    {
        "id": "prod_baseball_cap",
        "slug": "baseball-cap",
        "name": "Baseball Cap",
        "description": "Six-panel cap with an adjustable strap.",
        "price_cents": 2500,
        "currency": "USD",
        "image_url": "/images/baseball-cap.png",
        "available_for_sale": True,
        "category_ids": ["cat_accessories"],
    },
    {
        "id": "prod_tote_bag",
        "slug": "tote-bag",
        "name": "Tote Bag",
        "description": "Canvas tote that fits a laptop and lunch.",
        "price_cents": 1800,
        "currency": "USD",
        "image_url": "/images/tote-bag.png",
        "available_for_sale": True,
        "category_ids": ["cat_accessories"],
    },
    {
        "id": "prod_mug",
        "slug": "mug",
        "name": "Mug",
        "description": "Twelve ounce ceramic mug, dishwasher safe.",
        "price_cents": 1500,
        "currency": "USD",
        "image_url": "/images/mug.png",
        "available_for_sale": True,
        "category_ids": ["cat_drinkware", "cat_accessories"],
    },
    {
        "id": "prod_water_bottle",
        "slug": "water-bottle",
        "name": "Water Bottle",
        "description": "Insulated steel bottle that keeps drinks cold for a day.",
        "price_cents": 3200,
        "currency": "USD",
        "image_url": "/images/water-bottle.png",
        "available_for_sale": True,
        "category_ids": ["cat_drinkware", "cat_accessories"],
    },
]
