import unittest

from pages.generate_plan import is_generate_disabled, should_start_plan_generation


class GeneratePlanButtonFlowTest(unittest.TestCase):
    def test_starts_when_clicked_and_not_in_progress(self):
        self.assertTrue(should_start_plan_generation(True, False))

    def test_does_not_start_when_already_in_progress(self):
        self.assertFalse(should_start_plan_generation(True, True))

    def test_does_not_start_without_click(self):
        self.assertFalse(should_start_plan_generation(False, False))

    def test_does_not_start_without_selected_days(self):
        self.assertFalse(should_start_plan_generation(True, False, has_selected_days=False))

    def test_does_not_start_in_progress_with_no_days(self):
        self.assertFalse(should_start_plan_generation(True, True, has_selected_days=False))


class GenerateButtonStateTest(unittest.TestCase):
    def test_enabled_with_days_and_idle(self):
        self.assertFalse(is_generate_disabled(False, ["周一", "周三"]))

    def test_disabled_without_days(self):
        self.assertTrue(is_generate_disabled(False, []))
        self.assertTrue(is_generate_disabled(False, None))

    def test_disabled_while_generating(self):
        self.assertTrue(is_generate_disabled(True, ["周一"]))

    def test_disabled_state_blocks_start(self):
        for in_progress, days in [(True, ["周一"]), (False, []), (True, [])]:
            with self.subTest(in_progress=in_progress, days=days):
                disabled = is_generate_disabled(in_progress, days)
                started = should_start_plan_generation(True, in_progress, has_selected_days=bool(days))
                self.assertTrue(disabled)
                self.assertFalse(started)


if __name__ == "__main__":
    unittest.main()
