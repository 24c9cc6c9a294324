# catalog_sync/services/attribute_service.py
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
import logging

from sqlalchemy import insert, update
from sqlalchemy.orm import Session

from catalog_sync.models import EavAttribute, BackendType, VALUE_MODELS
from catalog_sync.exceptions import InvalidValueError, NotFoundError
from catalog_sync.services.base import StorageService

logger = logging.getLogger(__name__)


def coerce_value(backend_type: BackendType, value: Any) -> Any:
    """Convert a raw feed value into the type stored by a value table.

    Args:
        backend_type: Backend type of the attribute
        value: Raw value (None clears the value)

    Returns:
        Value ready to be stored

    Raises:
        InvalidValueError: If the value cannot be converted
    """
    if value is None:
        return None

    try:
        if backend_type in (BackendType.VARCHAR, BackendType.TEXT):
            if isinstance(value, (dict, list, tuple)):
                raise ValueError("expected a scalar value")
            return str(value)

        if backend_type == BackendType.INT:
            if isinstance(value, bool):
                return int(value)
            if isinstance(value, float) and not value.is_integer():
                raise ValueError("expected a whole number")
            return int(value)

        if backend_type == BackendType.DECIMAL:
            if isinstance(value, bool):
                raise ValueError("expected a number")
            number = Decimal(str(value).strip())
            if not number.is_finite():
                raise ValueError("expected a finite number")
            return number

        if backend_type == BackendType.DATETIME:
            if isinstance(value, datetime):
                return value
            if isinstance(value, date):
                return datetime(value.year, value.month, value.day)
            return datetime.fromisoformat(str(value))

    except (ValueError, TypeError, InvalidOperation):
        raise InvalidValueError(f'Value "{value}" is not a valid {backend_type.value} value')

    raise InvalidValueError(f"Attributes with {backend_type.value} backend cannot be updated")


class ProductAttribute(StorageService):
    """A resolved attribute that can write values for products."""

    def __init__(self, session: Session, attribute_id: int, code: str,
                 backend_type: BackendType, store_id: int = 0):
        super().__init__(session)
        self.attribute_id = attribute_id
        self.code = code
        self.backend_type = backend_type
        self.store_id = store_id

    def update_value(self, entity_id: int, value: Any) -> None:
        """Store a value of this attribute for a product.

        Args:
            entity_id: Entity id of the product
            value: Raw value from the update
        """
        if self.backend_type not in VALUE_MODELS:
            raise InvalidValueError(f"Attribute \"{self.code}\" is stored on the product entity and cannot be updated")

        stored_value = coerce_value(self.backend_type, value)
        model = VALUE_MODELS[self.backend_type]

        statement = (
            update(model)
            .where(
                model.entity_id == entity_id,
                model.attribute_id == self.attribute_id,
                model.store_id == self.store_id
            )
            .values(value=stored_value)
        )
        action = f"update attribute {self.code} for product {entity_id}"

        if self._write(statement, action) == 0:
            self._insert(model, entity_id, stored_value, action)

    def _insert(self, model, entity_id: int, stored_value: Any, action: str) -> None:
        statement = insert(model.__table__).values(
            entity_id=entity_id,
            attribute_id=self.attribute_id,
            store_id=self.store_id,
            value=stored_value
        )
        self._write(statement, action)


class AttributeService(StorageService):
    """Resolves attribute codes to writable product attributes."""

    def __init__(self, session: Session, store_id: int = 0):
        """Initialize the attribute service.

        Args:
            session: Database session
            store_id: Store scope the values are written for
        """
        super().__init__(session)
        self.store_id = store_id
        self._attributes: Dict[str, ProductAttribute] = {}

    def get_attribute(self, code: str) -> Optional[EavAttribute]:
        """Get an attribute definition by code.

        Args:
            code: Attribute code

        Returns:
            EavAttribute object or None if not found
        """
        return self._read(
            lambda: self.session.query(EavAttribute).filter(EavAttribute.attribute_code == code).first(),
            f"load attribute {code}"
        )

    def resolve_attribute(self, code: str) -> ProductAttribute:
        """Get a writable attribute for a field code.

        Resolved attributes are cached for the lifetime of the service.

        Args:
            code: Attribute code

        Returns:
            ProductAttribute for the code

        Raises:
            NotFoundError: If no attribute has this code
            InvalidValueError: If the attribute's backend type is unknown
        """
        if code in self._attributes:
            return self._attributes[code]

        attribute = self.get_attribute(code)
        if attribute is None:
            raise NotFoundError(f"Attribute \"{code}\" not found")

        try:
            backend_type = BackendType(attribute.backend_type)
        except ValueError:
            raise InvalidValueError(f"Attribute \"{code}\" has unknown backend type {attribute.backend_type}")

        logger.debug(f"Resolved attribute {code} to id {attribute.attribute_id} ({backend_type.value})")

        product_attribute = ProductAttribute(
            self.session,
            attribute.attribute_id,
            code,
            backend_type,
            store_id=self.store_id
        )
        self._attributes[code] = product_attribute
        return product_attribute
