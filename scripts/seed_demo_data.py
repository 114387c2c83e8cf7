# Demo Data Generator
import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from app.models import db, User, Product, FarmInput, FarmingGuide

app = create_app()

DEMO_FARMER = {
    'name': 'Wanjiru Kamau',
    'email': 'farmer_demo@kfarm.local',
    'phone': '+254700000001',
    'password': 'demo123',
}

PRODUCTS = [
    {'name': 'Sukuma Wiki', 'price': 30, 'city': 'Nakuru', 'category': 'Vegetables',
     'quantity': 120, 'unit': 'bunches', 'description': 'Freshly harvested kale, picked this morning.'},
    {'name': 'Hass Avocados', 'price': 15, 'city': "Murang'a", 'category': 'Fruits',
     'quantity': 400, 'unit': 'pieces', 'description': 'Export grade Hass avocados.'},
    {'name': 'Dry Maize', 'price': 55, 'city': 'Eldoret', 'category': 'Grains',
     'quantity': 900, 'unit': 'kg', 'description': 'Sun dried, moisture below 13%.'},
    {'name': 'Irish Potatoes', 'price': 40, 'city': 'Nyandarua', 'category': 'Vegetables',
     'quantity': 650, 'unit': 'kg', 'description': 'Shangi variety, sorted by size.'},
]

FARM_INPUTS = [
    {'name': 'DAP Fertilizer', 'price': 3500, 'category': 'Fertilizers', 'quantity': 80, 'unit': 'bag',
     'description': '50kg bag for planting.', 'discount_eligible': True,
     'discount_threshold': 10, 'discount_percentage': 5,
     'specifications': {'brand': 'Yara', 'applicationMethod': 'Apply at planting, 1 bottle top per hole'}},
    {'name': 'Hybrid Maize Seed H614', 'price': 650, 'category': 'Seeds', 'quantity': 300, 'unit': 'kg',
     'description': 'Highland hybrid, 2kg packets.',
     'specifications': {'manufacturer': 'Kenya Seed Company', 'storageInstructions': 'Keep dry and cool'}},
    {'name': 'Knapsack Sprayer 16L', 'price': 2800, 'category': 'Tools', 'quantity': 25, 'unit': 'piece',
     'description': 'Manual pressure sprayer.'},
    {'name': 'Duduthrin 1.75EC', 'price': 450, 'category': 'Pesticides', 'quantity': 140, 'unit': 'bottle',
     'description': 'Broad spectrum insecticide, 100ml.',
     'specifications': {'safetyInstructions': 'Wear gloves and a mask when spraying'}},
]

GUIDES = [
    {'crop': 'Maize', 'title': 'Planting maize for the long rains',
     'content': 'Plant at the onset of the rains at 75cm by 25cm spacing, one seed per hole. '
                'Top dress with CAN when the crop is knee high.'},
    {'crop': 'Tomatoes', 'title': 'Managing blight in tomatoes',
     'content': 'Stake plants to keep leaves off the soil, remove infected leaves early and '
                'rotate with non-solanaceous crops.'},
    {'crop': 'Kale', 'title': 'Continuous harvesting of sukuma wiki',
     'content': 'Harvest the lower leaves every week and leave at least five leaves on the plant.'},
]


def get_demo_farmer():
    farmer = User.query.filter_by(email=DEMO_FARMER['email']).first()
    if farmer:
        return farmer

    print("No demo farmer found. Creating one...")
    farmer = User(name=DEMO_FARMER['name'], email=DEMO_FARMER['email'], phone=DEMO_FARMER['phone'])
    farmer.set_password(DEMO_FARMER['password'])
    db.session.add(farmer)
    db.session.commit()
    print(f"Farmer created: {farmer.email} / {DEMO_FARMER['password']}")
    return farmer


def seed_demo_data():
    with app.app_context():
        farmer = get_demo_farmer()

        print("Seeding products...")
        for data in PRODUCTS:
            if Product.query.filter_by(name=data['name'], farmer_id=farmer.id).first():
                print(f"Skipped (already exists): {data['name']}")
                continue
            db.session.add(Product(farmer_id=farmer.id, **data))
            print(f"Added: {data['name']}")

        print("Seeding farm inputs...")
        for data in FARM_INPUTS:
            if FarmInput.query.filter_by(name=data['name'], seller_id=farmer.id).first():
                print(f"Skipped (already exists): {data['name']}")
                continue
            db.session.add(FarmInput(seller_id=farmer.id, **data))
            print(f"Added: {data['name']}")

        print("Seeding farming guides...")
        for data in GUIDES:
            if FarmingGuide.query.filter_by(title=data['title']).first():
                print(f"Skipped (already exists): {data['title']}")
                continue
            db.session.add(FarmingGuide(user_id=farmer.id, **data))
            print(f"Added: {data['title']}")

        db.session.commit()
        print("Seeding complete!")


if __name__ == '__main__':
    seed_demo_data()
