"""
plainmodel - typed models to and from JSON-shaped plain data

Models declare their fields with annotations. Per-field metadata (stored
name, nested type, ignore policy, transform, validators) and a per-model
naming case drive conversion in both directions; validation is shallow,
asynchronous and isolated per field.

Example:
    from typing import List
    from plainmodel import BaseModel, Field, Ignore, ModelConfig, NamingCase

    class Address(BaseModel):
        model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)
        street_name: str

    class User(BaseModel):
        model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

        user_id: int
        full_name: str = Field(name="full_name")
        password: str = Field(default="", ignore=Ignore.SERIALIZE)
        addresses: List[Address] = Field(default_factory=list)

    user = User.from_({"userId": 1, "full_name": "Ann", "addresses": [{"streetName": "Main"}]})
    user.to_plain()
    # {'userId': 1, 'full_name': 'Ann', 'addresses': [{'streetName': 'Main'}]}
"""

__version__ = "0.1.0"

# --- Errors ---
from .errors import ConfigurationError, NamingCaseError, PlainModelError

# --- Naming cases ---
from .naming import NamingCase, naming_case_fn

# --- Configuration ---
from .config import ModelConfig, get_default_naming_case, set_default_naming_case

# --- Field ---
from .fields import Field, FieldInfo, Ignore, TransformType

# --- Functional validators ---
from .functional_validators import field_validator

# --- Validation results ---
from .validation import FieldError

# --- BaseModel ---
from .model import BaseModel


__all__ = [
    # Errors
    "PlainModelError", "ConfigurationError", "NamingCaseError",

    # Naming cases
    "NamingCase", "naming_case_fn",

    # Configuration
    "ModelConfig", "get_default_naming_case", "set_default_naming_case",

    # Field
    "Field", "FieldInfo", "Ignore", "TransformType",

    # Functional validators
    "field_validator",

    # Validation results
    "FieldError",

    # BaseModel
    "BaseModel",
]
