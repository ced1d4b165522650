import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base, get_db
from app.shared.database.models import City, Customer, Driver, Restaurant
from app.modules.registry.repository import (
    CityRepository, CustomerRepository, RestaurantRepository, DriverRepository
)
from app.modules.delivery.repository import DeliveryRepository
from app.modules.delivery.distance import FixedDistance
from app.modules.delivery.locks import CityLocks
from app.modules.delivery.order_service import OrderService
from app.modules.delivery.service import get_distance_function
from app.main import app


class SequenceDistance:
    """Hands out the given distances in order, then repeats the last one"""

    def __init__(self, *distances):
        self.distances = list(distances)
        self.calls = 0

    def __call__(self, customer, restaurant):
        index = min(self.calls, len(self.distances) - 1)
        self.calls += 1
        return self.distances[index]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repositories(db_session):
    return {
        "cities": CityRepository(db_session),
        "customers": CustomerRepository(db_session),
        "restaurants": RestaurantRepository(db_session),
        "drivers": DriverRepository(db_session),
        "deliveries": DeliveryRepository(db_session),
    }


@pytest.fixture
def walt_data(repositories):
    """Four cities, eleven drivers, five customers and five restaurants"""
    cities = repositories["cities"]
    jerusalem, tlv, bash, haifa = cities.save_all([
        City(name="Jerusalem"),
        City(name="Tel-Aviv"),
        City(name="Beer-Sheva"),
        City(name="Haifa"),
    ])

    repositories["drivers"].save_all([
        Driver(name="Mary", city=tlv),
        Driver(name="Patricia", city=tlv),
        Driver(name="Jennifer", city=haifa),
        Driver(name="James", city=bash),
        Driver(name="John", city=bash),
        Driver(name="Robert", city=jerusalem),
        Driver(name="David", city=jerusalem),
        Driver(name="Daniel", city=tlv),
        Driver(name="Noa", city=haifa),
        Driver(name="Ofri", city=haifa),
        Driver(name="Neta", city=jerusalem),
    ])

    repositories["customers"].save_all([
        Customer(name="Beethoven", city=tlv, description="Ludwig van Beethoven"),
        Customer(name="Mozart", city=jerusalem, description="Wolfgang Amadeus Mozart"),
        Customer(name="Chopin", city=haifa, description="Frédéric François Chopin"),
        Customer(name="Rachmaninoff", city=tlv, description="Sergei Rachmaninoff"),
        Customer(name="Bach", city=tlv, description="Sebastian Bach. Johann"),
    ])

    repositories["restaurants"].save_all([
        Restaurant(name="meat", city=jerusalem, description="All meat restaurant"),
        Restaurant(name="vegan", city=tlv, description="Only vegan"),
        Restaurant(name="cafe", city=tlv, description="Coffee shop"),
        Restaurant(name="chinese", city=tlv, description="chinese restaurant"),
        Restaurant(name="restaurant", city=tlv, description="mexican restaurant "),
    ])

    return {"jerusalem": jerusalem, "tlv": tlv, "bash": bash, "haifa": haifa}


@pytest.fixture
def make_order_service(repositories):
    def factory(distance_fn=None, **kwargs):
        return OrderService(
            customers=repositories["customers"],
            drivers=repositories["drivers"],
            deliveries=repositories["deliveries"],
            distance_fn=distance_fn or FixedDistance(5),
            locks=CityLocks(),
            **kwargs
        )
    return factory


@pytest.fixture
def place_order(repositories, make_order_service):
    """Order by customer and restaurant name, like the API does"""
    service = make_order_service()

    def place(customer_name, restaurant_name, delivery_time, order_service=None):
        return (order_service or service).create_order_and_assign_driver(
            repositories["customers"].find_by_name(customer_name),
            repositories["restaurants"].find_by_name(restaurant_name),
            delivery_time
        )
    return place


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_distance_function] = lambda: FixedDistance(5)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sequence_distance():
    return SequenceDistance
