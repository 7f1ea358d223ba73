import unittest
from itertools import combinations

from nofat.profile import PlanRequestError
from nofat.schedule_builder import (
    WEEKDAYS,
    build_weekly_plan,
    build_weekly_workouts,
    format_frequency,
    sort_days,
    toggle_day,
    validate_schedule,
)


AI_PLAN = {
    "name": "燃脂计划",
    "duration": "30分钟",
    "workouts": [
        {
            "day": "周一",
            "name": "全身循环",
            "duration": "30分钟",
            "exercises": [{"name": "深蹲", "sets": "3组", "reps": "15次", "rest": "60秒"}],
        },
        {"day": "周二", "name": "休息", "duration": "0", "exercises": []},
    ],
}

TEMPLATE = {
    "title": "有氧跑步",
    "duration": "20分钟",
    "details": [
        {"name": "慢跑热身", "duration": "5分钟", "description": "心率提升"},
        {"name": "冲刺", "sets": "3组", "reps": "30秒", "rest": "60秒慢走"},
    ],
}


class AiModeScheduleTests(unittest.TestCase):
    def test_always_seven_days_in_canonical_order(self):
        for size in range(1, 8):
            for days in combinations(WEEKDAYS, size):
                workouts = build_weekly_workouts(AI_PLAN, list(days), "07:00", is_ai_mode=True)
                self.assertEqual([w["day"] for w in workouts], WEEKDAYS)

    def test_unselected_days_become_rest_placeholders(self):
        workouts = build_weekly_workouts(AI_PLAN, ["周一"], "07:00", is_ai_mode=True)
        sunday = workouts[6]
        self.assertEqual(sunday, {"day": "周日", "name": "休息", "duration": "0", "exercises": []})
        self.assertNotIn("time", sunday)

    def test_selected_day_reuses_model_entry_with_time(self):
        workouts = build_weekly_workouts(AI_PLAN, ["周一"], "18:30", is_ai_mode=True)
        monday = workouts[0]
        self.assertEqual(monday["name"], "全身循环")
        self.assertEqual(monday["time"], "18:30")
        self.assertEqual(monday["exercises"][0]["name"], "深蹲")

    def test_selected_day_missing_from_model_gets_generic_session(self):
        workouts = build_weekly_workouts(AI_PLAN, ["周四"], "07:00", is_ai_mode=True)
        thursday = workouts[3]
        self.assertEqual(thursday["name"], "燃脂计划")
        self.assertEqual(thursday["duration"], "30分钟")
        self.assertEqual(thursday["exercises"], AI_PLAN["workouts"][0]["exercises"])
        self.assertIsNot(thursday["exercises"], AI_PLAN["workouts"][0]["exercises"])

    def test_does_not_mutate_base_plan(self):
        build_weekly_workouts(AI_PLAN, ["周一"], "07:00", is_ai_mode=True)
        self.assertNotIn("time", AI_PLAN["workouts"][0])


class TemplateModeScheduleTests(unittest.TestCase):
    def test_only_selected_days_are_emitted(self):
        for size in range(1, 8):
            for days in combinations(WEEKDAYS, size):
                workouts = build_weekly_workouts(TEMPLATE, list(days), "07:00")
                self.assertEqual(len(workouts), size)
                self.assertTrue(all(w["day"] in days for w in workouts))

    def test_template_exercise_defaults(self):
        workouts = build_weekly_workouts(TEMPLATE, ["周三"], "06:00")
        day = workouts[0]
        self.assertEqual(day["name"], "有氧跑步")
        self.assertEqual(day["duration"], "20分钟")
        self.assertEqual(day["time"], "06:00")
        self.assertEqual(
            day["exercises"][0],
            {"name": "慢跑热身", "sets": "1组", "reps": "5分钟", "rest": "无"},
        )
        self.assertEqual(
            day["exercises"][1],
            {"name": "冲刺", "sets": "3组", "reps": "30秒", "rest": "60秒慢走"},
        )


class ScheduleHelpersTests(unittest.TestCase):
    def test_build_weekly_plan_sets_schedule_label(self):
        plan = build_weekly_plan(AI_PLAN, ["周三", "周一"], "07:00", is_ai_mode=True)
        self.assertEqual(plan["frequency"], "周一 周三 07:00")
        self.assertEqual(plan["name"], "燃脂计划")
        self.assertEqual(len(plan["workouts"]), 7)

    def test_format_frequency_lists_days_verbatim(self):
        self.assertEqual(
            format_frequency(["周三", "周一"], "07:00"),
            "每周 2 天：[周一、周三]，时间：07:00",
        )

    def test_sort_days_rejects_unknown_labels(self):
        with self.assertRaises(PlanRequestError):
            sort_days(["Monday"])

    def test_toggle_day_adds_and_removes(self):
        selected = toggle_day(["周五"], "周一")
        self.assertEqual(selected, ["周一", "周五"])
        self.assertEqual(toggle_day(selected, "周五"), ["周一"])

    def test_validate_schedule_rejects_empty_selection(self):
        with self.assertRaises(PlanRequestError):
            validate_schedule([], "07:00")

    def test_validate_schedule_rejects_bad_time(self):
        with self.assertRaises(PlanRequestError):
            validate_schedule(["周一"], "7am")


if __name__ == "__main__":
    unittest.main()
