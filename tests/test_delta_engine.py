import unittest
from dataclasses import replace

from drift.domain.delta import Severity
from drift.domain.delta_engine import compute_deltas
from drift.domain.snapshot import CallToAction, FieldMetrics, Keyword, SiteDiagnostics

from drift_fixtures import make_snapshot, with_on_page, with_perf


class TestComputeDeltasBaseline(unittest.TestCase):
    def test_missing_side_yields_no_deltas(self):
        snapshot = make_snapshot()
        self.assertEqual(compute_deltas(None, snapshot), [])
        self.assertEqual(compute_deltas(snapshot, None), [])
        self.assertEqual(compute_deltas(None, None), [])

    def test_identical_snapshots_yield_no_deltas(self):
        self.assertEqual(compute_deltas(make_snapshot(0), make_snapshot(5)), [])

    def test_repeated_comparison_is_identical(self):
        prev = make_snapshot()
        latest = with_on_page(with_perf(prev, score=70), title="Other")
        self.assertEqual(compute_deltas(prev, latest), compute_deltas(prev, latest))


class TestPerformanceDeltas(unittest.TestCase):
    def test_score_regression_is_high(self):
        prev = with_perf(make_snapshot(), score=92)
        latest = with_perf(make_snapshot(5), score=78)

        deltas = compute_deltas(prev, latest)

        self.assertEqual(len(deltas), 1)
        delta = deltas[0]
        self.assertEqual(delta.id, "delta-01")
        self.assertEqual(delta.label, "Performance Score")
        self.assertEqual(delta.severity, Severity.HIGH)
        self.assertEqual(delta.before, "92/100")
        self.assertEqual(delta.after, "78/100")
        self.assertEqual(delta.note, "Dropped by 14 points")

    def test_score_improvement_is_medium(self):
        prev = with_perf(make_snapshot(), score=60)
        latest = with_perf(make_snapshot(5), score=75)
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.severity, Severity.MEDIUM)
        self.assertEqual(delta.note, "Improved by 15 points")

    def test_score_change_below_threshold_ignored(self):
        prev = with_perf(make_snapshot(), score=90)
        latest = with_perf(make_snapshot(5), score=81)
        self.assertEqual(compute_deltas(prev, latest), [])

    def test_lcp_slowdown_over_one_second_is_high(self):
        prev = with_perf(make_snapshot(), largest_contentful_paint="2.1 s")
        latest = with_perf(make_snapshot(5), largest_contentful_paint="3,4 s")
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "LCP (Lab)")
        self.assertEqual(delta.severity, Severity.HIGH)
        self.assertEqual(delta.before, "2.1 s")
        self.assertEqual(delta.after, "3,4 s")
        self.assertEqual(delta.note, "Slower by 1.30s")

    def test_lcp_small_speedup_is_medium(self):
        prev = with_perf(make_snapshot(), largest_contentful_paint="3.0 s")
        latest = with_perf(make_snapshot(5), largest_contentful_paint="2.4 s")
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.severity, Severity.MEDIUM)
        self.assertEqual(delta.note, "Faster by 0.60s")

    def test_unparsable_metric_is_skipped(self):
        prev = with_perf(make_snapshot(), largest_contentful_paint="N/A")
        latest = with_perf(make_snapshot(5), largest_contentful_paint="9.0 s")
        self.assertEqual(compute_deltas(prev, latest), [])

    def test_inp_change(self):
        prev = with_perf(make_snapshot(), interaction_to_next_paint="150 ms")
        latest = with_perf(make_snapshot(5), interaction_to_next_paint="400 ms")
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "INP (Lab)")
        self.assertEqual(delta.severity, Severity.HIGH)
        self.assertEqual(delta.note, "Slower by 250ms")

    def test_cls_boundary_counts_as_change(self):
        prev = with_perf(make_snapshot(), cumulative_layout_shift="0.10")
        latest = with_perf(make_snapshot(5), cumulative_layout_shift="0.15")
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "CLS (Lab)")
        self.assertEqual(delta.severity, Severity.MEDIUM)
        self.assertEqual(delta.note, "Worse by 0.05")

    def test_field_lcp_change(self):
        prev = replace(make_snapshot(), field_metrics=FieldMetrics(largest_contentful_paint="2.40 s"))
        latest = replace(make_snapshot(5), field_metrics=FieldMetrics(largest_contentful_paint="3.60 s"))
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "LCP (Field p75)")
        self.assertEqual(delta.severity, Severity.HIGH)

    def test_missing_section_suppresses_comparison(self):
        prev = replace(make_snapshot(), performance_metrics=None, field_metrics=None)
        latest = with_perf(make_snapshot(5), score=10)
        self.assertEqual(compute_deltas(prev, latest), [])


class TestOnPageDeltas(unittest.TestCase):
    def test_title_change(self):
        prev = with_on_page(make_snapshot(), title="Acme Co")
        latest = with_on_page(make_snapshot(5), title="Acme Corp | Home")
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "Title Tag")
        self.assertEqual(delta.severity, Severity.MEDIUM)
        self.assertEqual(delta.before, "Acme Co")
        self.assertEqual(delta.after, "Acme Corp | Home")
        self.assertIsNone(delta.note)

    def test_empty_text_shows_marker(self):
        prev = with_on_page(make_snapshot(), meta_description="")
        latest = with_on_page(make_snapshot(5), meta_description="New description")
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "Meta Description")
        self.assertEqual(delta.before, "NOT OBSERVED")

    def test_robots_falls_back_to_header_and_is_high(self):
        prev = with_on_page(make_snapshot(), meta_robots="", x_robots_tag="index")
        latest = with_on_page(make_snapshot(5), meta_robots="", x_robots_tag="noindex")
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "Robots Directive")
        self.assertEqual(delta.severity, Severity.HIGH)
        self.assertEqual((delta.before, delta.after), ("index", "noindex"))

    def test_h1_change_joined_in_order(self):
        prev = with_on_page(make_snapshot(), headings=["One", "Two"])
        latest = with_on_page(make_snapshot(5), headings=["Two", "One"])
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "H1")
        self.assertEqual(delta.before, "One | Two")
        self.assertEqual(delta.after, "Two | One")

    def test_word_count_below_threshold_ignored(self):
        prev = with_on_page(make_snapshot(), word_count=1000)
        latest = with_on_page(make_snapshot(5), word_count=1250)
        self.assertEqual(compute_deltas(prev, latest), [])

    def test_word_count_drop(self):
        prev = with_on_page(make_snapshot(), word_count=1000)
        latest = with_on_page(make_snapshot(5), word_count=500)
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "Word Count")
        self.assertEqual(delta.note, "Decreased by 50%")

    def test_keywords_only_compared_when_both_sides_have_them(self):
        prev = with_on_page(make_snapshot(), top_keywords=[])
        latest = with_on_page(make_snapshot(5), top_keywords=[Keyword("gadgets", 3)])
        self.assertEqual(compute_deltas(prev, latest), [])

    def test_keywords_compare_top_three(self):
        prev = with_on_page(make_snapshot())
        latest = with_on_page(
            make_snapshot(5),
            top_keywords=[Keyword("widgets", 9), Keyword("acme", 7), Keyword("pricing", 4), Keyword("extra", 1)],
        )
        self.assertEqual(compute_deltas(prev, latest), [])

        latest = with_on_page(make_snapshot(5), top_keywords=[Keyword("gadgets", 9)])
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.before, "widgets, acme, pricing")
        self.assertEqual(delta.after, "gadgets")

    def test_cta_disappearing_is_high(self):
        prev = with_on_page(make_snapshot(), calls_to_action=[CallToAction("Buy now", "/buy")])
        latest = with_on_page(make_snapshot(5), calls_to_action=[])
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "CTA Text")
        self.assertEqual(delta.severity, Severity.HIGH)
        self.assertEqual(delta.before, "Buy now")
        self.assertEqual(delta.after, "NOT OBSERVED")

    def test_cta_text_change_is_medium(self):
        prev = with_on_page(make_snapshot(), calls_to_action=[CallToAction("Buy now", "/buy")])
        latest = with_on_page(make_snapshot(5), calls_to_action=[CallToAction("Get started", "/start")])
        self.assertEqual(compute_deltas(prev, latest)[0].severity, Severity.MEDIUM)


class TestDiagnosticsDeltas(unittest.TestCase):
    def test_sitemap_change(self):
        prev = make_snapshot()
        latest = replace(make_snapshot(5), diagnostics=SiteDiagnostics(robots_txt_status=200, sitemap_urls=[]))
        delta = compute_deltas(prev, latest)[0]
        self.assertEqual(delta.label, "Sitemap URLs")
        self.assertEqual(delta.after, "NOT OBSERVED")


class TestDeltaOrdering(unittest.TestCase):
    def test_ids_follow_table_order(self):
        prev = make_snapshot()
        latest = with_on_page(with_perf(make_snapshot(5), score=70), title="Changed", calls_to_action=[])
        deltas = compute_deltas(prev, latest)
        self.assertEqual([d.label for d in deltas], ["Performance Score", "Title Tag", "CTA Text"])
        self.assertEqual([d.id for d in deltas], ["delta-01", "delta-02", "delta-03"])


if __name__ == "__main__":
    unittest.main()
