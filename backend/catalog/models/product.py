from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId


class Product:
    """商品模型"""

    GENDERS = [
        'male',
        'female',
    ]

    CATEGORIES = [
        'makeup',     # 彩妆
        'skincare',   # 护肤
        'haircare',   # 护发
    ]

    # Keys accepted from request bodies; everything else is system-assigned
    WRITABLE_FIELDS = ('name', 'picture', 'description', 'gender', 'category', 'price')

    NAME_MAX_LENGTH = 50

    def __init__(self, owner_id, name, picture, description, gender, category, price):
        self.owner_id = owner_id
        self.name = name
        self.picture = picture
        self.description = description
        self.gender = gender
        self.category = category
        self.price = float(price)
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at

    def to_dict(self):
        """转换为 MongoDB 文档"""
        return {
            'owner_id': self.owner_id,
            'name': self.name,
            'picture': self.picture,
            'description': self.description,
            'gender': self.gender,
            'category': self.category,
            'price': self.price,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }

    @staticmethod
    def from_payload(payload, owner_id):
        """从已校验的请求体创建商品, owner 只来自认证身份"""
        return Product(
            owner_id=owner_id,
            name=payload.get('name'),
            picture=payload.get('picture'),
            description=payload.get('description'),
            gender=payload.get('gender'),
            category=payload.get('category'),
            price=payload.get('price')
        )

    @staticmethod
    def update_fields(payload):
        """Writable subset of a validated body, with price coerced and updated_at stamped."""
        fields = {key: payload[key] for key in Product.WRITABLE_FIELDS if key in payload}
        if 'price' in fields:
            fields['price'] = float(fields['price'])
        fields['updated_at'] = datetime.now(timezone.utc)
        return fields


def parse_object_id(value):
    """Return an ObjectId, or None when value is not a valid identifier."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def _isoformat(value):
    if isinstance(value, datetime):
        if value.tzinfo is None:
            # BSON datetimes come back naive but are stored as UTC
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return value


def serialize_product(doc):
    """MongoDB 文档 -> JSON 可序列化 dict"""
    if doc is None:
        return None
    data = dict(doc)
    if '_id' in data:
        data['_id'] = str(data['_id'])
    for key in ('created_at', 'updated_at'):
        if key in data:
            data[key] = _isoformat(data[key])
    return data
