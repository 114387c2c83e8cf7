# Marketplace Models
from app.models.user import db, generate_id, isoformat
from datetime import datetime

FARM_INPUT_CATEGORIES = ('Seeds', 'Fertilizers', 'Tools', 'Pesticides')

SPECIFICATION_FIELDS = (
    'brand', 'manufacturer', 'applicationMethod',
    'safetyInstructions', 'storageInstructions',
)


class Product(db.Model):
    __tablename__ = 'products'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Float, nullable=False)
    farmer_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    description = db.Column(db.Text)
    city = db.Column(db.String(120), nullable=False)
    image = db.Column(db.String(255))
    category = db.Column(db.String(100))
    quantity = db.Column(db.Integer, nullable=False)
    unit = db.Column(db.String(20), nullable=False)  # kg, pieces, bunches
    available = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    farmer = db.relationship('User', back_populates='products')

    @property
    def owner_id(self):
        return self.farmer_id

    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'price': self.price,
            'farmer': self.farmer.owner_summary() if self.farmer else None,
            'description': self.description,
            'city': self.city,
            'image': self.image,
            'category': self.category,
            'quantity': self.quantity,
            'unit': self.unit,
            'available': self.available,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Product {self.id} - {self.name}>'


class FarmInput(db.Model):
    __tablename__ = 'farm_inputs'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Float, nullable=False)
    seller_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    description = db.Column(db.Text)
    category = db.Column(db.String(20), nullable=False, index=True)  # one of FARM_INPUT_CATEGORIES
    image = db.Column(db.String(255))
    quantity = db.Column(db.Integer, nullable=False)
    unit = db.Column(db.String(20), nullable=False)
    available = db.Column(db.Boolean, default=True, nullable=False)
    discount_eligible = db.Column(db.Boolean, default=False, nullable=False)
    discount_threshold = db.Column(db.Integer)  # minimum quantity for the bulk discount
    discount_percentage = db.Column(db.Float)
    specifications = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    seller = db.relationship('User', back_populates='farm_inputs')

    @property
    def owner_id(self):
        return self.seller_id

    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'price': self.price,
            'seller': self.seller.owner_summary() if self.seller else None,
            'description': self.description,
            'category': self.category,
            'image': self.image,
            'quantity': self.quantity,
            'unit': self.unit,
            'available': self.available,
            'discountEligible': self.discount_eligible,
            'discountThreshold': self.discount_threshold,
            'discountPercentage': self.discount_percentage,
            'specifications': self.specifications,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<FarmInput {self.id} - {self.name}>'
