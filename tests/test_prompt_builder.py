import unittest

from nofat.prompt_builder import (
    SYSTEM_PROMPT,
    build_plan_messages,
    build_plan_prompt,
    calculate_bmi,
)


REQUEST = {
    "age": 25,
    "gender": "male",
    "height": 175,
    "weight": 70,
    "goal": "weight-loss",
    "level": "beginner",
    "duration": "30分钟",
    "preference": "home",
    "frequency": "每周 2 天：[周一、周三]，时间：07:00",
}


class BmiTests(unittest.TestCase):
    def test_bmi_is_formatted_to_one_decimal(self):
        self.assertEqual(calculate_bmi(175, 70), "22.9")

    def test_bmi_accepts_string_metrics(self):
        self.assertEqual(calculate_bmi("180", "81"), "25.0")


class PlanPromptTests(unittest.TestCase):
    def test_prompt_contains_profile_and_choices(self):
        prompt = build_plan_prompt(REQUEST)
        self.assertIn("男性", prompt)
        self.assertIn("25岁", prompt)
        self.assertIn("175cm / 70kg (BMI: 22.9)", prompt)
        self.assertIn("减脂塑形", prompt)
        self.assertIn("初级", prompt)
        self.assertIn("在家", prompt)

    def test_prompt_echoes_frequency_verbatim(self):
        prompt = build_plan_prompt(REQUEST)
        self.assertIn(REQUEST["frequency"], prompt)
        self.assertIn('"休息"', prompt)

    def test_prompt_spells_out_schema_and_forbids_fences(self):
        prompt = build_plan_prompt(REQUEST)
        for key in ('"workouts"', '"exercises"', '"nutritionTips"', '"tips"', '"goal"'):
            self.assertIn(key, prompt)
        self.assertIn("不要出现 ```json", prompt)
        self.assertIn("完整的7天", prompt)

    def test_optional_fields_only_when_present(self):
        self.assertNotIn("伤病史", build_plan_prompt(REQUEST))

        request = dict(REQUEST, injuryHistory="左膝半月板", notes="早上空腹", waistCircumference=80)
        prompt = build_plan_prompt(request)
        self.assertIn("伤病史：左膝半月板", prompt)
        self.assertIn("特殊说明：早上空腹", prompt)
        self.assertIn("腰围：80cm", prompt)

    def test_messages_have_system_then_user_role(self):
        messages = build_plan_messages(REQUEST)
        self.assertEqual([m["role"] for m in messages], ["system", "user"])
        self.assertEqual(messages[0]["content"], SYSTEM_PROMPT)
        self.assertEqual(messages[1]["content"], build_plan_prompt(REQUEST))


if __name__ == "__main__":
    unittest.main()
