"""Banking notification service: lifecycle, delivery channels and upstream checks."""
