"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's validation rules
(checkout form patterns, postal code formats, price and stock bounds) and
match the exact field names expected by the Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

# Cities and postal codes the checkout form accepts for each country
_PORTUGAL = [("Lisboa", "1200-195"), ("Porto", "4050-297"), ("Braga", "4700-435"), ("Coimbra", "3000-214")]
_BELGIUM = [("Bruxelles", "1000"), ("Antwerpen", "2000"), ("Gent", "9000"), ("Liège", "4000")]

# ---------- Identity ----------


def valid_email() -> str:
    """Generate unique, lower-case emails that pass the email check."""
    local = fake.user_name()[:20].lower()
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def valid_password() -> str:
    return fake.password(length=12)


def customer_name() -> tuple[str, str]:
    """Generate (first_name, last_name) made of letters only, 2-50 chars each."""
    first = "".join(c for c in fake.first_name() if c.isalpha())[:50]
    last = "".join(c for c in fake.last_name() if c.isalpha())[:50]
    return first.ljust(2, "a"), last.ljust(2, "a")


def registration_data() -> dict:
    """Generate RegisterRequest payload."""
    first, last = customer_name()
    return {
        "email": valid_email(),
        "password": valid_password(),
        "name": f"{first} {last}",
        "country": random.choice(["Portugal", "Belgium"]),
    }


# ---------- Catalogue ----------


def category_name() -> str:
    """Generate a category name like 'Casual Footwear'."""
    return f"{fake.word().capitalize()} {fake.word().capitalize()} {uuid.uuid4().hex[:4]}"[:100]


def product_data(category_id: str) -> dict:
    """Generate CreateProductRequest payload; one in four products is discounted."""
    price = round(random.uniform(5.0, 150.0), 2)
    discounted = random.random() < 0.25
    return {
        "name": f"{fake.word().capitalize()} {fake.word().capitalize()}"[:255],
        "description": fake.paragraph(nb_sentences=3),
        "price": price,
        "quantity": random.randint(50, 500),
        "category_id": category_id,
        "has_discount": discounted,
        "discount_price": round(price * 0.8, 2) if discounted else None,
        "images": [f"https://cdn.example.com/images/{uuid.uuid4().hex}.jpg"],
    }


def restock_data() -> dict:
    """Generate UpdateProductRequest payload that tops up stock."""
    return {"quantity": random.randint(200, 1000)}


# ---------- Ordering ----------


def valid_phone(country: str) -> str:
    """Generate phones matching the checkout form: 7-15 digits with one space."""
    if country == "Portugal":
        return f"+351 9{random.randint(10000000, 99999999)}"
    return f"+32 4{random.randint(10000000, 99999999)}"


def shipping_info(email: str | None = None) -> dict:
    """Generate a CheckoutForm payload for Portugal or Belgium."""
    country = random.choice(["Portugal", "Belgium"])
    city, postal_code = random.choice(_PORTUGAL if country == "Portugal" else _BELGIUM)
    first, last = customer_name()
    return {
        "email": email or valid_email(),
        "phone": valid_phone(country),
        "first_name": first,
        "last_name": last,
        "address": fake.street_address()[:200].ljust(5, "."),
        "city": city,
        "postal_code": postal_code,
        "country": country,
        "payment_method": "card",
    }


def cart_item_data(product_id: str) -> dict:
    """Generate AddToCartRequest payload."""
    return {"product_id": product_id, "quantity": random.randint(1, 3)}


# ---------- Payments ----------


def webhook_event(event_type: str, order_id: str, session_id: str | None = None) -> dict:
    """Build a checkout webhook body in the provider's envelope."""
    obj = {"id": session_id or f"cs_test_{uuid.uuid4().hex[:24]}", "metadata": {"orderId": order_id}}
    if event_type == "checkout.session.completed":
        obj["payment_intent"] = f"pi_{uuid.uuid4().hex[:24]}"
    return {"id": f"evt_{uuid.uuid4().hex[:24]}", "type": event_type, "data": {"object": obj}}
