# catalog_sync/models.py
from sqlalchemy import (
    Column, Integer, String, Numeric, DateTime, Boolean, ForeignKey, Text,
    SmallInteger, UniqueConstraint, Index
)
from sqlalchemy.orm import declarative_base, declared_attr, relationship
from sqlalchemy.sql import func
import enum

Base = declarative_base()

class BackendType(enum.Enum):
    """Storage location of an attribute's values.

    Values:
        STATIC ('static'): Column on the product entity table itself
        VARCHAR ('varchar'): Short string value table
        INT ('int'): Integer value table
        DECIMAL ('decimal'): Fixed point value table
        TEXT ('text'): Long text value table
        DATETIME ('datetime'): Timestamp value table
    """
    STATIC = 'static'
    VARCHAR = 'varchar'
    INT = 'int'
    DECIMAL = 'decimal'
    TEXT = 'text'
    DATETIME = 'datetime'

class Product(Base):
    __tablename__ = 'catalog_product_entity'

    entity_id = Column(Integer, primary_key=True)
    sku = Column(String(64), nullable=False, unique=True)
    type_id = Column(String(32), nullable=False, default='simple')  # simple, configurable, ...
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    stock_item = relationship("StockItem", back_populates="product", uselist=False)
    websites = relationship("ProductWebsite", back_populates="product")

class StockItem(Base):
    __tablename__ = 'cataloginventory_stock_item'

    item_id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey('catalog_product_entity.entity_id'), nullable=False, unique=True)
    qty = Column(Numeric(12, 4), nullable=False, default=0)
    is_in_stock = Column(Boolean, nullable=False, default=False)

    product = relationship("Product", back_populates="stock_item")

class ProductSuperLink(Base):
    """Child to parent link of a composite product."""
    __tablename__ = 'catalog_product_super_link'

    link_id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey('catalog_product_entity.entity_id'), nullable=False)
    parent_id = Column(Integer, ForeignKey('catalog_product_entity.entity_id'), nullable=False)

    __table_args__ = (
        UniqueConstraint('product_id', 'parent_id', name='uq_super_link_product_parent'),
        Index('ix_super_link_parent_id', 'parent_id'),
    )

class Website(Base):
    __tablename__ = 'core_website'

    website_id = Column(SmallInteger, primary_key=True)
    code = Column(String(32), nullable=False, unique=True)
    name = Column(String(64))

class ProductWebsite(Base):
    __tablename__ = 'catalog_product_website'

    product_id = Column(Integer, ForeignKey('catalog_product_entity.entity_id'), primary_key=True)
    website_id = Column(SmallInteger, ForeignKey('core_website.website_id'), primary_key=True)

    product = relationship("Product", back_populates="websites")

class EavAttribute(Base):
    __tablename__ = 'eav_attribute'

    attribute_id = Column(Integer, primary_key=True)
    attribute_code = Column(String(255), nullable=False, unique=True)
    backend_type = Column(String(8), nullable=False, default=BackendType.STATIC.value)
    frontend_label = Column(String(255))

class ProductValueMixin:
    """Columns shared by the typed attribute value tables."""

    value_id = Column(Integer, primary_key=True)
    store_id = Column(SmallInteger, nullable=False, default=0)

    @declared_attr
    def attribute_id(cls):
        return Column(Integer, ForeignKey('eav_attribute.attribute_id'), nullable=False)

    @declared_attr
    def entity_id(cls):
        return Column(Integer, ForeignKey('catalog_product_entity.entity_id'), nullable=False)

    @declared_attr
    def __table_args__(cls):
        return (
            UniqueConstraint('entity_id', 'attribute_id', 'store_id',
                             name=f'uq_{cls.__tablename__}_entity_attribute_store'),
        )

class ProductEntityVarchar(ProductValueMixin, Base):
    __tablename__ = 'catalog_product_entity_varchar'

    value = Column(String(255))

class ProductEntityInt(ProductValueMixin, Base):
    __tablename__ = 'catalog_product_entity_int'

    value = Column(Integer)

class ProductEntityDecimal(ProductValueMixin, Base):
    __tablename__ = 'catalog_product_entity_decimal'

    value = Column(Numeric(12, 4))

class ProductEntityText(ProductValueMixin, Base):
    __tablename__ = 'catalog_product_entity_text'

    value = Column(Text)

class ProductEntityDatetime(ProductValueMixin, Base):
    __tablename__ = 'catalog_product_entity_datetime'

    value = Column(DateTime)

# Value table per backend type
VALUE_MODELS = {
    BackendType.VARCHAR: ProductEntityVarchar,
    BackendType.INT: ProductEntityInt,
    BackendType.DECIMAL: ProductEntityDecimal,
    BackendType.TEXT: ProductEntityText,
    BackendType.DATETIME: ProductEntityDatetime,
}
