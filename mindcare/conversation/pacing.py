import asyncio
import random

from ..core.config import settings

def thinking_delay(rng: random.Random | None = None) -> float:
    lo = max(0.0, float(settings.TYPING_DELAY_MIN_SECONDS))
    hi = max(lo, float(settings.TYPING_DELAY_MAX_SECONDS))
    return (rng or random).uniform(lo, hi)

async def thinking_pause(rng: random.Random | None = None) -> float:
    """Cosmetic pause before paced bot messages are released; state is already saved."""
    delay = thinking_delay(rng)
    if delay > 0:
        await asyncio.sleep(delay)
    return delay
