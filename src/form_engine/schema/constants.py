"""
Constants for the form schema.

This module contains the messages, patterns and limits used by the
validation rules. Centralizing these makes them easier to maintain.
"""

import re

from form_engine.models.record import Gender

# local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MINIMUM_AGE = 18

GENDER_CHOICES = frozenset(Gender)

HOBBIES_PATH = "hobbies"
MIN_HOBBIES = 1

# Messages keyed by the rule they belong to
FIRST_NAME_REQUIRED = "First Name is Required"
LAST_NAME_REQUIRED = "Last Name is Required"
EMAIL_REQUIRED = "Email is Required"
EMAIL_INVALID = "Invalid email address"
AGE_REQUIRED = "Age is Required"
AGE_TOO_LOW = f"You must be at least {MINIMUM_AGE} years old"
GENDER_REQUIRED = "Gender is Required"
CITY_REQUIRED = "City is Required"
STATE_REQUIRED = "State is Required"
HOBBY_NAME_REQUIRED = "Hobby name is required"
HOBBIES_REQUIRED = "At least one hobby is required"
START_DATE_REQUIRED = "Start date is required"
REFERRAL_REQUIRED = "Referral source is required when subscribing"
