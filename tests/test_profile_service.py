import os
import io
import sys
import time
import unittest
from PIL import Image

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import KeyValueRepository, ProfileRepository
from models import UserProfile
from profile_service import TIPS, ProfileService, TipRotator


def _png_bytes(color: str = "#888888") -> bytes:
    img = Image.new("RGBA", (16, 16), color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class ProfileServiceTest(unittest.TestCase):
    def setUp(self) -> None:
        self.db = "test_profile.db"
        if os.path.exists(self.db):
            os.remove(self.db)
        self.repo = ProfileRepository(KeyValueRepository(self.db))
        self.service = ProfileService(self.repo, confirmation_delay=0.05)

    def tearDown(self) -> None:
        self.service.close()
        if os.path.exists(self.db):
            os.remove(self.db)

    def test_defaults_without_stored_profile(self) -> None:
        self.assertEqual(self.service.profile, UserProfile())

    def test_save_and_load(self) -> None:
        self.service.save(UserProfile(height="180", weight="82", age="31"))
        other = ProfileService(self.repo)
        self.addCleanup(other.close)
        self.assertEqual(other.profile.height, "180")
        self.assertEqual(other.profile.weight, "82")
        self.assertEqual(other.profile.age, "31")
        self.assertIsNone(other.profile.profile_image)

    def test_image_not_persisted_until_save(self) -> None:
        png = _png_bytes()
        self.assertTrue(self.service.set_image(png))
        self.assertEqual(self.service.profile.profile_image, png)
        self.assertIsNone(self.repo.fetch())
        self.service.save(UserProfile(height="170"))
        stored = self.repo.fetch()
        self.assertEqual(stored.profile_image, png)
        self.assertEqual(stored.height, "170")

    def test_save_keeps_given_image(self) -> None:
        profile = UserProfile(height="180", weight="80", age="30", profile_image=_png_bytes())
        self.service.save(profile)
        other = ProfileService(self.repo)
        self.addCleanup(other.close)
        self.assertEqual(other.load(), profile)

    def test_given_image_replaces_previous(self) -> None:
        self.service.set_image(_png_bytes("#888888"))
        newer = _png_bytes("#aaaaaa")
        self.service.save(UserProfile(profile_image=newer))
        self.assertEqual(self.repo.fetch().profile_image, newer)

    def test_invalid_image_ignored(self) -> None:
        png = _png_bytes()
        self.service.set_image(png)
        self.assertFalse(self.service.set_image(b"not an image"))
        self.assertFalse(self.service.set_image(None))
        self.assertEqual(self.service.profile.profile_image, png)

    def test_undecodable_profile_uses_default(self) -> None:
        self.repo.store.set(self.repo.key, b"{broken")
        other = ProfileService(self.repo)
        self.addCleanup(other.close)
        self.assertEqual(other.profile, UserProfile())

    def test_save_confirmation_clears(self) -> None:
        self.service.save()
        self.assertTrue(self.service.show_save_confirmation)
        time.sleep(0.3)
        self.assertFalse(self.service.show_save_confirmation)


class TipRotatorTest(unittest.TestCase):
    def test_advance_wraps(self) -> None:
        rotator = TipRotator(tips=["a", "b", "c"])
        self.assertEqual(rotator.current_tip, "a")
        self.assertEqual([rotator.advance() for _ in range(4)], ["b", "c", "a", "b"])

    def test_default_tips(self) -> None:
        rotator = TipRotator()
        self.assertEqual(len(rotator.tips), 10)
        self.assertEqual(rotator.current_tip, TIPS[0])

    def test_empty_tips_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TipRotator(tips=[])

    def test_thread_rotates_and_stops(self) -> None:
        seen = []
        rotator = TipRotator(tips=["a", "b"], interval=0.01, on_tip=seen.append)
        rotator.start()
        time.sleep(0.2)
        rotator.stop()
        rotator.join(timeout=1)
        self.assertFalse(rotator.is_alive())
        self.assertTrue(rotator.stopped)
        self.assertGreater(len(seen), 0)
        count = len(seen)
        time.sleep(0.05)
        self.assertEqual(len(seen), count)

    def test_service_close_stops_tips(self) -> None:
        db = "test_profile_tips.db"
        self.addCleanup(lambda: os.path.exists(db) and os.remove(db))
        service = ProfileService(
            ProfileRepository(KeyValueRepository(db)), tip_interval=0.01, start_tips=True
        )
        time.sleep(0.05)
        service.close()
        service.tips.join(timeout=1)
        self.assertFalse(service.tips.is_alive())


if __name__ == "__main__":
    unittest.main()
