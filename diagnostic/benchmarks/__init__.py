from .presets import apply_business_type, get_preset, list_presets

__all__ = ["apply_business_type", "get_preset", "list_presets"]
