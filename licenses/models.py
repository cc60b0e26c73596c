from licenses.infrastructure.models import License, PaymentRecord  # noqa: F401
