"""
Services - habit, log, metrics, entitlement, coach and reminder logic
"""
