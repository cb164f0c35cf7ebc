import unittest

from gradebook.models.course import Course
from gradebook.services.grades import (
    calculate_grade_points,
    grade_value,
    is_in_progress,
    round2,
    semester_totals,
    should_include_semester,
)


def _course(code, grade, credits):
    return Course(code=code, title=code, grade=grade, credits=credits,
                  grade_points=calculate_grade_points(credits, grade))


class GradeTests(unittest.TestCase):
    def test_in_progress_markers(self):
        for grade in ("", "  ", "IP", "ip", "TBD", "NG", "Pending", None):
            self.assertTrue(is_in_progress(grade), grade)
        for grade in ("A", "F", "W", "P"):
            self.assertFalse(is_in_progress(grade), grade)

    def test_grade_values(self):
        self.assertEqual(grade_value("A+"), 4.0)
        self.assertEqual(grade_value("a-"), 3.67)
        self.assertEqual(grade_value("D-"), 0.67)
        self.assertEqual(grade_value("W"), 0.0)
        self.assertEqual(grade_value(""), 0.0)

    def test_grade_points(self):
        self.assertAlmostEqual(calculate_grade_points(4, "A-"), 14.68, places=6)
        self.assertEqual(calculate_grade_points(3, "F"), 0.0)
        self.assertEqual(calculate_grade_points(3, "IP"), 0.0)
        self.assertEqual(calculate_grade_points("abc", "A"), 0.0)
        self.assertAlmostEqual(calculate_grade_points("3", "B+"), 9.99, places=6)

    def test_round2_rounds_half_up(self):
        self.assertEqual(round2(0.125), 0.13)
        self.assertEqual(round2(3.0), 3.0)


class SemesterTotalsTests(unittest.TestCase):
    def test_all_or_nothing(self):
        courses = [
            _course("COP3502", "A", 3),
            _course("MAC2311", "B", 3),
            _course("PHY2048", "C", 4),
            _course("ENC1101", "", 3),
        ]
        totals = semester_totals(courses)
        self.assertFalse(totals.include_in_overall_gpa)
        self.assertEqual(totals.total_credits, 10)
        self.assertAlmostEqual(totals.total_grade_points, 29.0)
        self.assertEqual(totals.gpa, 2.9)

    def test_completed_semester_is_included(self):
        totals = semester_totals([_course("COP3502", "A", 3), _course("MAC2311", "B+", 4)])
        self.assertTrue(totals.include_in_overall_gpa)
        self.assertEqual(totals.gpa, 3.62)

    def test_empty_semester(self):
        totals = semester_totals([])
        self.assertEqual(totals.gpa, 0)
        self.assertEqual(totals.total_credits, 0)
        self.assertFalse(totals.include_in_overall_gpa)
        self.assertFalse(should_include_semester([]))

    def test_idempotent(self):
        courses = [_course("COP3502", "A-", 3), _course("MAC2311", "IP", 4)]
        self.assertEqual(semester_totals(courses), semester_totals(courses))


if __name__ == "__main__":
    unittest.main()
