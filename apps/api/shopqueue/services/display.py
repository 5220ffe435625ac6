from shopqueue.services.validators import clamp_int

# Server-side ranges are authoritative for every client (TV, admin UI).
TV_LEFT_PERCENT_RANGE = (30, 90)
TV_AD_ROTATION_SECONDS_RANGE = (3, 60)

DEFAULT_TV_LEFT_PERCENT = 70
DEFAULT_TV_AD_ROTATION_SECONDS = 10


def clamp_tv_left_percent(value) -> int:
    lo, hi = TV_LEFT_PERCENT_RANGE
    return clamp_int(value, lo, hi, DEFAULT_TV_LEFT_PERCENT)


def clamp_tv_ad_rotation_seconds(value) -> int:
    lo, hi = TV_AD_ROTATION_SECONDS_RANGE
    return clamp_int(value, lo, hi, DEFAULT_TV_AD_ROTATION_SECONDS)


def tv_settings(shop) -> dict:
    """Clamped display settings; a missing shop row gets the defaults."""
    return {
        "tv_left_percent": clamp_tv_left_percent(getattr(shop, "tv_left_percent", None)),
        "tv_ad_rotation_seconds": clamp_tv_ad_rotation_seconds(getattr(shop, "tv_ad_rotation_seconds", None)),
    }
