"""Django apps, one per bounded context of the rental platform."""
