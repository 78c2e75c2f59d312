#!/usr/bin/env python3
"""Script to insert mock spots at varying distances around a center location"""
import os
import sys
import random
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from models.position import Position
from models.spot import Spot
from services.spot_service import SpotService
from utils.distance import destination


# Center location (Berlin)
CENTER_LAT = 52.5200
CENTER_LNG = 13.4050

# (distance in km, name)
SPOT_TEMPLATES = [
    (0.5, "Spree Bank"),
    (2, "Tiergarten Lake"),
    (5, "Wannsee Beach"),
    (8, "Müggelsee Jetty"),
    (15, "Liepnitzsee"),
    (30, "Werbellinsee"),
    (60, "Scharmützelsee"),
    (120, "Stechlinsee"),
]


def main():
    parser = argparse.ArgumentParser(description="Seed spots around a center point")
    parser.add_argument("--latitude", type=float, default=CENTER_LAT)
    parser.add_argument("--longitude", type=float, default=CENTER_LNG)
    parser.add_argument("--continent", default="EU")
    parser.add_argument("--country", default="DE")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    center = Position(args.latitude, args.longitude)
    spot_service = SpotService()

    print(f"📍 Seeding {len(SPOT_TEMPLATES)} spots around {center.latitude:.4f}, {center.longitude:.4f}")

    created = 0
    for distance_km, name in SPOT_TEMPLATES:
        bearing = rng.uniform(0, 360)
        position = destination(center, distance_km * 1000, bearing)
        spot = Spot(
            continent=args.continent,
            country=args.country,
            position=position,
            name=name
        )
        try:
            spot_id = spot_service.save(spot)
            created += 1
            print(f"   ✅ {name}: {spot_id} at {position.latitude:.5f}, {position.longitude:.5f} ({distance_km}km)")
        except Exception as e:
            print(f"   ❌ {name}: {str(e)}")

    print(f"\n✅ Created {created}/{len(SPOT_TEMPLATES)} spots")


if __name__ == "__main__":
    main()
