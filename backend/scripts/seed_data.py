"""
Seed script for the Rental Booking API
Creates locations (en/fr names), agencies, properties, a renter and bookings
"""
import sys
import os
from datetime import datetime, timedelta
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.database import SessionLocal, engine, Base
from app.models.agency import Agency
from app.models.booking import Booking, BookingStatus
from app.models.location import Location, LocationValue
from app.models.property import Property
from app.models.user import User


LOCATIONS = [
    {"en": "Paris", "fr": "Paris"},
    {"en": "London", "fr": "Londres"},
    {"en": "Venice", "fr": "Venise"},
    {"en": "Geneva", "fr": "Genève"},
    {"en": "Lisbon", "fr": "Lisbonne"},
]


def seed_data():
    db = SessionLocal()

    try:
        print("Creating database tables...")
        Base.metadata.create_all(bind=engine)

        # Check if data already exists
        if db.query(Location).first():
            print("Data already seeded. Skipping...")
            return

        print("Creating locations...")
        locations = []
        for names in LOCATIONS:
            location = Location(values=[LocationValue(language=lang, value=name) for lang, name in names.items()])
            db.add(location)
            locations.append(location)
        db.commit()

        print("Creating agencies...")
        agencies = [
            Agency(full_name="Seaside Rentals", email="contact@seaside.example", avatar="seaside.png"),
            Agency(full_name="Mountain Homes", email="hello@mountain.example", avatar="mountain.png"),
            Agency(full_name="City Stays", email="info@citystays.example", avatar="citystays.png"),
        ]
        for agency in agencies:
            db.add(agency)
        db.commit()

        print("Creating properties...")
        properties = [
            Property(name="Montmartre Loft", agency_id=agencies[2].id, location_id=locations[0].id,
                     price=140, cancellation=0),
            Property(name="Camden Flat", agency_id=agencies[2].id, location_id=locations[1].id,
                     price=160, cancellation=40),
            Property(name="Canal House", agency_id=agencies[0].id, location_id=locations[2].id,
                     price=210, cancellation=-1),
            Property(name="Lakeside Chalet", agency_id=agencies[1].id, location_id=locations[3].id,
                     price=250, cancellation=0),
        ]
        for prop in properties:
            db.add(prop)
        db.commit()

        renter = User(email="renter@example.com", full_name="Sample Renter", language="en")
        db.add(renter)
        db.commit()

        print("Creating bookings...")
        today = datetime.combine(datetime.now().date(), datetime.min.time())
        bookings = []
        for i, prop in enumerate(properties):
            for offset, status in ((-20, BookingStatus.PAID), (7 + i, BookingStatus.DEPOSIT), (30 + i, BookingStatus.PENDING)):
                start = today + timedelta(days=offset)
                bookings.append(Booking(
                    property_id=prop.id,
                    agency_id=prop.agency_id,
                    user_id=renter.id,
                    from_date=start,
                    to_date=start + timedelta(days=4),
                    status=status.value,
                    cancellation=prop.cancellation >= 0,
                    price=prop.price * 4,
                ))
        db.add_all(bookings)
        db.commit()

        print("\n=== SEED DATA COMPLETE ===")
        print(f"Created {len(locations)} locations")
        print(f"Created {len(agencies)} agencies")
        print(f"Created {len(properties)} properties")
        print(f"Created {len(bookings)} bookings")

    except Exception as e:
        print(f"Error seeding data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
