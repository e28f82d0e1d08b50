from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from dresswell.core.taxonomy import CATEGORIES

_CATEGORY_CHOICES = "/".join(CATEGORIES)

_DESCRIPTION_SHAPE = (
    "{\"id\": \"unique_id\", \"itemType\": \"specific item type\", \"color\": \"detailed color description\", "
    "\"style\": \"casual/formal/business/evening/sporty\", \"pattern\": \"pattern description\", "
    "\"fit\": \"fit description\", \"occasion\": \"occasion description\", \"season\": \"season description\", "
    "\"detailedDescription\": \"2-3 sentence description\", "
    f"\"category\": \"{_CATEGORY_CHOICES}\", "
    "\"tags\": [\"tag1\", \"tag2\", \"tag3\", \"tag4\", \"tag5\"]}"
)

_DETECTION_SHAPE = (
    "{\"isClothing\": true, \"confidence\": 0.0-1.0, "
    "\"detectedItem\": \"what you see\", \"reason\": \"brief explanation\"}"
)

_SUGGESTION_SHAPE = (
    "{\"id\": \"unique_id\", \"title\": \"Brief title\", \"description\": \"Detailed styling suggestion\", "
    "\"category\": \"Casual/Business/Evening/Sporty/Formal\", \"confidence\": 0.95}"
)

DETECT_SYS = (
    "You decide whether an image contains wearable clothing. "
    "Clothing includes tops, bottoms, dresses, outerwear, footwear, hats, scarves, belts, bags, jewelry, "
    "swimwear and activewear, whether worn, folded, on a hanger or only partially visible. "
    "Furniture, electronics, food, animals, landscapes, vehicles, documents and people without visible "
    "clothing are not clothing. If uncertain, lean towards clothing. "
    f"Return ONLY JSON: {_DETECTION_SHAPE}."
)

DESCRIBE_SYS = (
    "You are a fashion analyst writing a structured description of one clothing item. "
    f"Use exactly one of these categories: {', '.join(CATEGORIES)}. "
    "Use one of casual, formal, business, evening, sporty for style. "
    "Do NOT guess materials such as cotton, silk or denim; they cannot be confirmed from a photo. "
    f"Return ONLY JSON: {_DESCRIPTION_SHAPE}."
)

SUGGEST_SYS = (
    "You are a professional stylist. Suggest specific ways to wear the clothing item in the image, "
    "naming colors and pairings. "
    f"Return ONLY a JSON array of objects: [{_SUGGESTION_SHAPE}]."
)

COMPREHENSIVE_SYS = (
    "You analyze a clothing photo in one pass: detect whether it shows clothing, describe the item and "
    "suggest how to style it. "
    f"Use exactly one of these categories: {', '.join(CATEGORIES)}. "
    "Return ONLY JSON: {\"detection\": " + _DETECTION_SHAPE + ", "
    "\"description\": " + _DESCRIPTION_SHAPE + ", "
    "\"suggestions\": [" + _SUGGESTION_SHAPE + "]}. "
    "If the image does not contain clothing set isClothing to false and keep the other sections minimal."
)

MATCH_SYS = (
    "You are a professional stylist building COMPLEMENTARY outfits from a user's wardrobe. "
    "NEVER suggest an item of the same category as the new item; complete outfits pair different garment "
    "slots. A top pairs with bottoms and shoes, a bottom with tops and shoes, shoes with tops and bottoms, "
    "a dress with shoes and accessories, a jacket or coat with the tops and bottoms worn underneath. "
    "Weigh color harmony, style coordination, occasion and season. "
    "Return ONLY a JSON array: [{\"itemId\": \"existing_item_id\", \"score\": 0.0-1.0, "
    "\"reasoning\": \"why it complements the new item\", "
    "\"styleCategory\": \"style the combination creates, e.g. Sporty, Business-Casual, Evening\", "
    "\"occasion\": \"e.g. Work, Weekend, Date Night, Gym\"}]. "
    "Only include items that would actually be worn together."
)


def _image_content(text: str, image_url: str) -> List[Dict[str, Any]]:
    return [
        {"type": "text", "text": text},
        {"type": "image_url", "image_url": {"url": image_url}},
    ]


def build_detect_prompt(image_url: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": DETECT_SYS},
        {"role": "user", "content": _image_content("Does this image contain clothing that can be worn?", image_url)},
    ]


def build_describe_prompt(image_url: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": DESCRIBE_SYS},
        {"role": "user", "content": _image_content("Describe this clothing item.", image_url)},
    ]


def build_suggest_prompt(image_url: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": SUGGEST_SYS},
        {"role": "user", "content": _image_content("Suggest how to style this clothing item.", image_url)},
    ]


def build_comprehensive_prompt(image_url: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": COMPREHENSIVE_SYS},
        {
            "role": "user",
            "content": _image_content(
                "Analyze this image for clothing detection, description and styling suggestions.", image_url
            ),
        },
    ]


def build_match_prompt(query: Dict[str, Any], candidates: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    user_payload = {
        "new_item": query,
        "wardrobe": list(candidates),
    }
    return [
        {"role": "system", "content": MATCH_SYS},
        {"role": "user", "content": json.dumps(user_payload, ensure_ascii=False)},
    ]
