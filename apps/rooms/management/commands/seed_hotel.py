"""Create the demo accounts and the sample room catalogue."""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.rooms.models import Room

User = get_user_model()

DEMO_USERS = [
    {
        "username": "admin",
        "email": "admin@hotel.com",
        "password": "admin123",
        "first_name": "Admin",
        "last_name": "User",
        "phone_number": "+1234567890",
        "role": User.Role.ADMIN,
    },
    {
        "username": "manager",
        "email": "manager@hotel.com",
        "password": "manager123",
        "first_name": "Manager",
        "last_name": "User",
        "phone_number": "+1111111111",
        "role": User.Role.MANAGER,
    },
    {
        "username": "john_doe",
        "email": "john@example.com",
        "password": "user123",
        "first_name": "John",
        "last_name": "Doe",
        "phone_number": "+0987654321",
        "role": User.Role.USER,
    },
]

SAMPLE_ROOMS = [
    {
        "room_number": "101",
        "room_type": Room.RoomType.SINGLE,
        "price": Decimal("80"),
        "capacity": 1,
        "description": "Cozy single room with city view",
        "amenities": ["WiFi", "TV", "Air Conditioning"],
        "floor": 1,
    },
    {
        "room_number": "102",
        "room_type": Room.RoomType.SINGLE,
        "price": Decimal("85"),
        "capacity": 1,
        "description": "Comfortable single room with balcony",
        "amenities": ["WiFi", "TV", "Air Conditioning", "Balcony"],
        "floor": 1,
    },
    {
        "room_number": "201",
        "room_type": Room.RoomType.DOUBLE,
        "price": Decimal("120"),
        "capacity": 2,
        "description": "Spacious double room with king-size bed",
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Bar"],
        "floor": 2,
    },
    {
        "room_number": "202",
        "room_type": Room.RoomType.DOUBLE,
        "price": Decimal("130"),
        "capacity": 2,
        "description": "Luxurious double room with sea view",
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Bar", "Sea View"],
        "floor": 2,
    },
    {
        "room_number": "301",
        "room_type": Room.RoomType.SUITE,
        "price": Decimal("200"),
        "capacity": 3,
        "description": "Executive suite with separate living area",
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Bar", "Living Room", "Bathtub"],
        "floor": 3,
    },
    {
        "room_number": "302",
        "room_type": Room.RoomType.SUITE,
        "price": Decimal("220"),
        "capacity": 3,
        "description": "Premium suite with panoramic view",
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Bar", "Living Room", "Balcony", "Bathtub"],
        "floor": 3,
    },
    {
        "room_number": "401",
        "room_type": Room.RoomType.DELUXE,
        "price": Decimal("300"),
        "capacity": 4,
        "description": "Deluxe room with premium amenities",
        "amenities": [
            "WiFi", "Smart TV", "Air Conditioning", "Mini Bar",
            "Coffee Machine", "Bathtub", "Work Desk",
        ],
        "floor": 4,
    },
    {
        "room_number": "PH01",
        "room_type": Room.RoomType.PRESIDENTIAL,
        "price": Decimal("500"),
        "capacity": 6,
        "description": "Presidential suite with luxury furnishings",
        "amenities": [
            "WiFi", "Smart TV", "Air Conditioning", "Full Kitchen", "Dining Room",
            "Living Room", "Jacuzzi", "2 Bathrooms", "Private Terrace",
        ],
        "floor": 5,
    },
]


class Command(BaseCommand):
    help = "Seeds demo admin/manager/guest accounts and the sample rooms"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete all rooms and non-superuser accounts first (bookings go with them)",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            Room.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()
            self.stdout.write(self.style.WARNING("Cleared existing rooms and accounts"))

        for data in DEMO_USERS:
            data = dict(data)
            password = data.pop("password")
            user, created = User.objects.get_or_create(email=data["email"], defaults=data)
            if created:
                user.set_password(password)
                user.save(update_fields=["password"])
                self.stdout.write(f"Created {user.role} {user.email} / {password}")
            else:
                self.stdout.write(f"Account {user.email} already exists, skipping")

        created_rooms = 0
        for data in SAMPLE_ROOMS:
            _, created = Room.objects.get_or_create(
                room_number=data["room_number"],
                defaults={k: v for k, v in data.items() if k != "room_number"},
            )
            created_rooms += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed complete: {created_rooms} new rooms, {Room.objects.count()} in catalogue"
            )
        )
