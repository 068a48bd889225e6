"""
app/validators package marker.
"""

from app.validators.mapping_validator import MappingValidator
from app.validators.menu_item_validator import MenuItemValidation, MenuItemValidator
from app.validators.upload_validator import UploadKind, classify_upload, validate_upload

__all__ = [
    "MappingValidator",
    "MenuItemValidation",
    "MenuItemValidator",
    "UploadKind",
    "classify_upload",
    "validate_upload",
]
