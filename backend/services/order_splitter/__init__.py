"""
Pure split helpers: item classification, money allocation, draft building.
Remote calls live in services.split_service.
"""
