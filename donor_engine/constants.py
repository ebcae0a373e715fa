"""
Global constants for the donor activity engine.

Centralizes the medical and scoring numbers used throughout the engine.
These are policy values, not user settings: tier bands and the impact
split live in the settings file (see config.py), everything here is fixed.
"""

# Eligibility
ELIGIBILITY_INTERVAL_DAYS = 56  # Minimum whole-blood inter-donation interval (8 weeks)

# Hospital quantities
ML_PER_UNIT = 450  # One whole-blood unit
DEFAULT_DONATION_ML = 450  # Backend default when bloodInfo.quantity is absent

# Blood types accepted by the backend; anything else is reported as UNKNOWN_BLOOD_TYPE
VALID_BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")
UNKNOWN_BLOOD_TYPE = "Unknown"

# Points
HOSPITAL_DONATION_POINTS = 100  # Approved/Completed hospital donation
ACTIVE_REGISTRATION_POINTS = 50  # Active emergency-donor registration

# Payments
SUCCESSFUL_PAYMENT_STATUS = "SUCCESS"

# Badge thresholds
FIRST_DONATION_THRESHOLD = 1
FIVE_LIVES_THRESHOLD = 5
REGULAR_DONOR_THRESHOLD = 3  # Either blood or money donations
TWENTY_DONATIONS_THRESHOLD = 20

# Sentinel returned by the eligibility calculator when no wait is needed
ELIGIBLE_NOW = "now"
