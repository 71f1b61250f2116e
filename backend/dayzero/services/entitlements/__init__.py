"""
Entitlements module - plan limits and AI coach quota
"""
from .plans import get_plan_limits, is_premium, normalize_plan
from .remote import SupabasePlanSource
from .service import EntitlementService

__all__ = ["get_plan_limits", "is_premium", "normalize_plan", "SupabasePlanSource", "EntitlementService"]
