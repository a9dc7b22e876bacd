"""Simple entrypoint to run the closet stylist against a demo closet."""

import json

from stylist_app.app import StylistApp

DEMO_CLOSET = [
    {"id": "1", "category": "Tops", "image": "plain_white_tee"},
    {"id": "2", "category": "Bottoms", "image": "black_jeans"},
    {"id": "3", "category": "Shoes", "image": "white_sneaker"},
]


def main() -> None:
    app = StylistApp()
    response = app.generate_outfits(DEMO_CLOSET, occasion="Casual")
    print(json.dumps({key: response[key] for key in ("status", "user_facing_summary", "outfits")}, indent=2))


if __name__ == "__main__":
    main()
