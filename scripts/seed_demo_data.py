#!/usr/bin/env python3
"""
Script to load demo cities, drivers, customers and restaurants
Run from the project root: python scripts/seed_demo_data.py
"""
import os
import sys

# Add the project root to the path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from app.config.database import SessionLocal, init_db
from app.shared.database.models import City, Customer, Driver, Restaurant
from app.modules.registry.repository import (
    CityRepository, CustomerRepository, RestaurantRepository, DriverRepository
)

DRIVERS = [
    ("Mary", "Tel-Aviv"), ("Patricia", "Tel-Aviv"), ("Jennifer", "Haifa"),
    ("James", "Beer-Sheva"), ("John", "Beer-Sheva"), ("Robert", "Jerusalem"),
    ("David", "Jerusalem"), ("Daniel", "Tel-Aviv"), ("Noa", "Haifa"),
    ("Ofri", "Haifa"), ("Neta", "Jerusalem"),
]

CUSTOMERS = [
    ("Beethoven", "Tel-Aviv", "Ludwig van Beethoven"),
    ("Mozart", "Jerusalem", "Wolfgang Amadeus Mozart"),
    ("Chopin", "Haifa", "Frédéric François Chopin"),
    ("Rachmaninoff", "Tel-Aviv", "Sergei Rachmaninoff"),
    ("Bach", "Tel-Aviv", "Sebastian Bach. Johann"),
]

RESTAURANTS = [
    ("meat", "Jerusalem", "All meat restaurant"),
    ("vegan", "Tel-Aviv", "Only vegan"),
    ("cafe", "Tel-Aviv", "Coffee shop"),
    ("chinese", "Tel-Aviv", "chinese restaurant"),
    ("restaurant", "Tel-Aviv", "mexican restaurant"),
]


def seed_demo_data():
    """Create the demo records unless the database already has cities"""
    init_db()
    db = SessionLocal()

    try:
        cities = CityRepository(db)
        existing = len(cities.find_all())
        if existing > 0:
            print(f"Database already has {existing} cities, nothing to do")
            return

        by_name = {
            city.name: city
            for city in cities.save_all(City(name=name) for name in ["Jerusalem", "Tel-Aviv", "Beer-Sheva", "Haifa"])
        }

        DriverRepository(db).save_all(
            Driver(name=name, city=by_name[city]) for name, city in DRIVERS
        )
        CustomerRepository(db).save_all(
            Customer(name=name, city=by_name[city], description=description)
            for name, city, description in CUSTOMERS
        )
        RestaurantRepository(db).save_all(
            Restaurant(name=name, city=by_name[city], description=description)
            for name, city, description in RESTAURANTS
        )

        print(f"Created {len(by_name)} cities, {len(DRIVERS)} drivers, "
              f"{len(CUSTOMERS)} customers and {len(RESTAURANTS)} restaurants")

    except Exception as e:
        db.rollback()
        print(f"Error loading demo data: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_data()
