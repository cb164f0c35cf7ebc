import math
import unittest

from gradebook.models.course import Course
from gradebook.services.grades import calculate_grade_points
from gradebook.services.records import build_semester
from gradebook.services.semesters import (
    academic_label,
    find_anchor,
    organize_semesters,
    year_level_for,
)
from gradebook.services.terms import parse_term


def _semester(name, grade="A"):
    course = Course(code="COP3502", title="Programming", grade=grade, credits=3,
                    grade_points=calculate_grade_points(3, grade))
    return build_semester(name, [course])


def _layout(sections):
    return [(s.label, [sem.name for sem in s.semesters]) for s in sections]


class OrganizeSemestersTests(unittest.TestCase):
    def test_summer_sits_between_academic_years(self):
        semesters = [_semester(n) for n in ("Fall 2023", "Spring 2024", "Summer 2024", "Fall 2024")]
        self.assertEqual(
            _layout(organize_semesters(semesters)),
            [
                ("Freshman", ["Fall 2023", "Spring 2024"]),
                ("Summer 2024", ["Summer 2024"]),
                ("Sophomore", ["Fall 2024"]),
            ],
        )

    def test_input_order_does_not_matter(self):
        names = ["Fall 2024", "Summer 2024", "Fall 2023", "Spring 2025", "Spring 2024"]
        sections = organize_semesters([_semester(n) for n in names])
        self.assertEqual(
            _layout(sections),
            [
                ("Freshman", ["Fall 2023", "Spring 2024"]),
                ("Summer 2024", ["Summer 2024"]),
                ("Sophomore", ["Fall 2024", "Spring 2025"]),
            ],
        )
        self.assertEqual((sections[0].sort_year, sections[0].sort_term_order), (2024, 1))
        self.assertEqual((sections[2].sort_year, sections[2].sort_term_order), (2025, 1))

    def test_spring_start_anchors_previous_fall(self):
        sections = organize_semesters([_semester("Spring 2024"), _semester("Fall 2024")])
        self.assertEqual(
            _layout(sections),
            [("Freshman", ["Spring 2024"]), ("Sophomore", ["Fall 2024"])],
        )

    def test_winter_and_unknown_terms_are_miscellaneous(self):
        names = ["Winter 2023", "Fall 2023", "Intersession", "Spring 2024"]
        sections = organize_semesters([_semester(n) for n in names])
        self.assertEqual(sections[0].label, "Freshman")
        self.assertEqual(sections[-1].label, "Miscellaneous")
        self.assertEqual([s.name for s in sections[-1].semesters], ["Intersession", "Winter 2023"])
        self.assertTrue(math.isinf(sections[-1].sort_year))

    def test_undated_academic_term_does_not_anchor(self):
        sections = organize_semesters([_semester(n) for n in ("Fall", "Fall 2023", "Spring 2024")])
        self.assertEqual(
            _layout(sections),
            [("Freshman", ["Fall 2023", "Spring 2024"]), ("Miscellaneous", ["Fall"])],
        )

    def test_earliest_winter_anchors_the_year_before(self):
        sections = organize_semesters([_semester(n) for n in ("Winter 2021", "Fall 2023", "Spring 2024")])
        self.assertEqual(
            _layout(sections),
            [("Senior", ["Fall 2023", "Spring 2024"]), ("Miscellaneous", ["Winter 2021"])],
        )

    def test_labels_past_the_table(self):
        self.assertEqual(academic_label(4), "Graduate I")
        self.assertEqual(academic_label(6), "Year 7")
        sections = organize_semesters([_semester("Fall 2020"), _semester("Fall 2026")])
        self.assertEqual([s.label for s in sections], ["Freshman", "Year 7"])

    def test_empty(self):
        self.assertEqual(organize_semesters([]), [])

    def test_pure_and_repeatable(self):
        semesters = [_semester(n) for n in ("Spring 2024", "Fall 2023")]
        first = organize_semesters(semesters)
        second = organize_semesters(semesters)
        self.assertEqual(first, second)
        self.assertEqual([s.name for s in semesters], ["Spring 2024", "Fall 2023"])
        first[0].semesters[0].name = "Changed"
        self.assertEqual(semesters[1].name, "Fall 2023")


class YearLevelTests(unittest.TestCase):
    def test_find_anchor(self):
        self.assertEqual(find_anchor([parse_term("Fall 2023"), parse_term("Spring 2024")]), 2023)
        self.assertEqual(find_anchor([parse_term("Spring 2024")]), 2023)
        self.assertEqual(find_anchor([parse_term("Summer 2022")]), 2021)
        self.assertEqual(find_anchor([parse_term("Winter 2021"), parse_term("Fall 2023")]), 2020)
        self.assertEqual(find_anchor([parse_term("Fall"), parse_term("Fall 2023")]), 2023)
        self.assertIsNone(find_anchor([parse_term("Intersession")]))

    def test_year_level_for(self):
        self.assertEqual(year_level_for("Fall 2023", 2023), "Freshman")
        self.assertEqual(year_level_for("Spring 2025", 2023), "Sophomore")
        self.assertEqual(year_level_for("Summer 2025", 2023), "Sophomore")
        self.assertEqual(year_level_for("Fall 2028", 2023), "Graduate II")

    def test_year_level_for_clamps_to_max_index(self):
        self.assertEqual(year_level_for("Fall 2030", 2023, max_index=3), "Senior")
        self.assertEqual(year_level_for("Fall 2020", 2023, max_index=3), "Freshman")

    def test_year_level_for_unplaceable_terms(self):
        self.assertIsNone(year_level_for("Winter 2023", 2023))
        self.assertIsNone(year_level_for("Fall", 2023))
        self.assertIsNone(year_level_for("Intersession 2024", 2023))
        self.assertIsNone(year_level_for("Fall 2023", None))


if __name__ == "__main__":
    unittest.main()
