from rest_framework.throttling import AnonRateThrottle


class VeryStrictThrottle(AnonRateThrottle):
    """
    Guards OTP issue/verify. Callers are identified by phone number rather
    than by session, so throttling is keyed on the client address.
    """
    scope = 'very_strict'


class StrictThrottle(AnonRateThrottle):
    """
    Money-moving endpoints: add, withdraw, join, submit result.
    """
    scope = 'strict'


class MediumThrottle(AnonRateThrottle):
    """
    Reads: balances, transaction history, tournament listings.
    """
    scope = 'medium'


class RelaxedThrottle(AnonRateThrottle):
    """
    Public aggregate endpoints such as the leaderboard.
    """
    scope = 'relaxed'
