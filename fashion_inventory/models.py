from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime
import enum
import uuid

Base = declarative_base()

def generate_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid.uuid4().hex

class ProductCategory(enum.Enum):
    """Enum for product categories.

    Values:
        SHIRT ('kemeja'): Shirts and tops
        PANTS ('celana'): Long and short trousers
        ROBE ('gamis'): Robes and long dresses
    """
    SHIRT = 'kemeja'
    PANTS = 'celana'
    ROBE = 'gamis'

    def __str__(self):
        """Return the string value of the enum."""
        return self.value

    @classmethod
    def from_string(cls, value) -> 'ProductCategory':
        """Create a ProductCategory from its value or member name.

        Args:
            value: String value ('kemeja', 'celana', 'gamis') or name ('SHIRT', ...)

        Returns:
            ProductCategory enum value

        Raises:
            ValueError if the string value is not valid
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            pass
        try:
            return cls[str(value).upper()]
        except KeyError:
            valid = ', '.join(c.value for c in cls)
            raise ValueError(f"Invalid product category: {value}. Valid values are: {valid}")

class Product(Base):
    __tablename__ = 'product'

    id = Column(String(32), primary_key=True, default=generate_id)
    sku = Column(String(50), nullable=False)
    name = Column(String(200), nullable=False)
    category = Column(Enum(ProductCategory), nullable=False)
    price = Column(Float, nullable=False)
    current_stock = Column(Integer, nullable=False, default=0)
    lead_time = Column(Float, nullable=False, default=7.0)  # in days
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    # SKU is not unique
    __table_args__ = (
        Index('ix_product_sku', 'sku'),
    )

    transactions = relationship(
        'SalesTransaction',
        back_populates='product',
        cascade='all, delete-orphan'
    )

    def to_dict(self):
        """Serialize the product with ISO-8601 timestamps."""
        return {
            'id': self.id,
            'sku': self.sku,
            'name': self.name,
            'category': self.category.value if self.category else None,
            'price': self.price,
            'current_stock': self.current_stock,
            'lead_time': self.lead_time,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f"<Product {self.sku} ({self.id}) stock={self.current_stock}>"

class SalesTransaction(Base):
    __tablename__ = 'sales_transaction'

    id = Column(String(32), primary_key=True, default=generate_id)
    product_id = Column(String(32), ForeignKey('product.id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Integer, nullable=False)
    date = Column(DateTime, nullable=False)
    unit_price = Column(Float, nullable=False)  # price captured at time of sale

    __table_args__ = (
        Index('ix_sales_transaction_product_date', 'product_id', 'date'),
    )

    product = relationship('Product', back_populates='transactions')

    def to_dict(self):
        """Serialize the transaction with ISO-8601 timestamps."""
        return {
            'id': self.id,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'date': self.date.isoformat() if self.date else None,
            'unit_price': self.unit_price
        }

    def __repr__(self):
        return f"<SalesTransaction {self.id} product={self.product_id} qty={self.quantity}>"
