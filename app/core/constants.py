"""
Service-wide constants
"""

SERVICE_NAME = "geoclock-attendance-backend"

# Employees seeded into an empty database
SEED_EMPLOYEE_ID = "EMP001"
SEED_EMPLOYEE_NAME = "John Doe"
SEED_ADMIN_ID = "ADMIN01"
SEED_ADMIN_NAME = "Admin User"

# Photo evidence is served from this URL prefix
UPLOADS_URL_PREFIX = "/uploads"
