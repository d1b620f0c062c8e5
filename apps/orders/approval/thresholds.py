"""Amount thresholds that decide which admin levels must approve an order."""

from decimal import Decimal

# Level 1: up to 500
# Level 2: up to 2000
# Level 3: up to 15000
LEVEL_1_THRESHOLD = Decimal('500')
LEVEL_2_THRESHOLD = Decimal('2000')
LEVEL_3_THRESHOLD = Decimal('15000')

ALL_LEVELS = (1, 2, 3)


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def required_levels(amount) -> list[int]:
    """
    Return the ascending admin levels that must approve an order of this amount.

    Amounts above LEVEL_3_THRESHOLD need the same three levels as amounts
    between the second and third thresholds; there is no fourth tier.
    """
    amount = _to_decimal(amount)

    if amount <= LEVEL_1_THRESHOLD:
        return [1]
    if amount <= LEVEL_2_THRESHOLD:
        return [1, 2]
    return [1, 2, 3]


def approval_chain(amount) -> list[int]:
    """Order in which levels are expected to sign off. Same as required_levels."""
    return required_levels(amount)
