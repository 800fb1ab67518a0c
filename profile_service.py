from __future__ import annotations
import io
import logging
import threading
from typing import Callable, Optional

from PIL import Image, UnidentifiedImageError

from db import ProfileRepository
from models import UserProfile

LOGGER = logging.getLogger(__name__)

TIPS = [
    "Eat enough protein for muscle recovery.",
    "Stay hydrated throughout the day.",
    "Consistency is more important than intensity.",
    "Don't skip your warm-ups to prevent injuries.",
    "Listen to your body and rest when you need it.",
    "Progressive overload is the key to getting stronger.",
    "Aim for 7-9 hours of quality sleep per night.",
    "Compound lifts are highly effective for overall strength.",
    "Stretch after your workouts to improve flexibility.",
    "Track your progress to stay motivated and see results.",
]


class TipRotator(threading.Thread):
    """Background thread cycling through ``tips`` every ``interval`` seconds."""

    def __init__(
        self,
        tips: list[str] | None = None,
        interval: float = 6.0,
        on_tip: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(daemon=True)
        self.tips = list(tips or TIPS)
        if not self.tips:
            raise ValueError("tips must not be empty")
        self.interval = interval
        self.on_tip = on_tip
        self.index = 0
        self._stopped = threading.Event()

    @property
    def current_tip(self) -> str:
        return self.tips[self.index]

    def advance(self) -> str:
        """Move to the next tip, wrapping around at the end."""
        self.index = (self.index + 1) % len(self.tips)
        tip = self.current_tip
        if self.on_tip is not None:
            self.on_tip(tip)
        return tip

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.advance()

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()


class ProfileService:
    """Own the single user profile record and the profile screen timers."""

    def __init__(
        self,
        repo: ProfileRepository,
        tip_interval: float = 6.0,
        confirmation_delay: float = 2.0,
        start_tips: bool = False,
    ) -> None:
        self.repo = repo
        self.profile = UserProfile()
        self.confirmation_delay = confirmation_delay
        self.show_save_confirmation = False
        self._confirmation_timer: Optional[threading.Timer] = None
        self.tips = TipRotator(interval=tip_interval)
        self.load()
        if start_tips:
            self.tips.start()

    @property
    def current_tip(self) -> str:
        return self.tips.current_tip

    def load(self) -> UserProfile:
        stored = self.repo.fetch()
        if stored is not None:
            self.profile = stored
        return self.profile

    def save(self, profile: UserProfile | None = None) -> None:
        """Persist ``profile``, or the in-memory profile when none is given.

        A ``profile`` without an image keeps the image set through ``set_image``.
        """
        if profile is not None:
            if profile.profile_image is None:
                profile = profile.model_copy(
                    update={"profile_image": self.profile.profile_image}
                )
            self.profile = profile
        self.repo.save(self.profile)
        LOGGER.debug("profile saved")
        self._flash_confirmation()

    def set_image(self, data: bytes | None) -> bool:
        """Replace the in-memory profile image; ignored unless ``data`` is an image."""
        if not data:
            return False
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            LOGGER.warning("ignoring profile image that could not be decoded: %s", exc)
            return False
        self.profile = self.profile.model_copy(update={"profile_image": data})
        return True

    def _flash_confirmation(self) -> None:
        self.show_save_confirmation = True
        if self._confirmation_timer is not None:
            self._confirmation_timer.cancel()
        self._confirmation_timer = threading.Timer(
            self.confirmation_delay, self._hide_confirmation
        )
        self._confirmation_timer.daemon = True
        self._confirmation_timer.start()

    def _hide_confirmation(self) -> None:
        self.show_save_confirmation = False

    def close(self) -> None:
        """Stop background timers tied to this service."""
        self.tips.stop()
        if self._confirmation_timer is not None:
            self._confirmation_timer.cancel()
            self._confirmation_timer = None
