import unittest
from unittest.mock import MagicMock

from googleapiclient.errors import HttpError

from config.settings import PageSpeedSettings
from drift.application.port.lab_metrics_port import LabAuditError
from drift.infrastructure.client.pagespeed_client import PageSpeedClient, normalize_lab_metrics

RECT = {"top": 10, "left": 0, "width": 320, "height": 200, "bottom": 210, "right": 320}

PSI_PAYLOAD = {
    "lighthouseResult": {
        "finalUrl": "https://acme.test/",
        "fetchTime": "2026-10-01T12:00:00.000Z",
        "lighthouseVersion": "12.0.0",
        "categories": {
            "performance": {"score": 0.874},
            "seo": {"score": 0.9},
            "accessibility": {"score": None},
            "best-practices": {"score": 1},
        },
        "audits": {
            "largest-contentful-paint": {"displayValue": "2.1 s"},
            "cumulative-layout-shift": {"displayValue": "0.05"},
            "speed-index": {"displayValue": "3.4 s"},
            "first-contentful-paint": {"displayValue": "1.2 s"},
            "interactive": {"displayValue": "4.8 s"},
            "max-potential-fid": {"displayValue": "130 ms"},
            "largest-contentful-paint-element": {
                "details": {
                    "type": "list",
                    "items": [
                        {"type": "table", "items": [{"node": {"boundingRect": RECT, "snippet": "<img src=hero.jpg>"}}]}
                    ],
                }
            },
            "layout-shift-elements": {
                "details": {
                    "items": [
                        {"node": {"snippet": "<div class=ad>"}},
                        {"node": {"boundingRect": RECT, "snippet": "<header>"}},
                    ]
                }
            },
        },
    }
}


class TestNormalizeLabMetrics(unittest.TestCase):
    def test_scores_are_rounded_percentages(self):
        metrics = normalize_lab_metrics(PSI_PAYLOAD)
        self.assertEqual(metrics.score, 87)
        self.assertEqual(metrics.seo_score, 90)
        self.assertEqual(metrics.accessibility_score, 0)
        self.assertEqual(metrics.best_practices_score, 100)

    def test_display_values_verbatim_with_na_marker(self):
        metrics = normalize_lab_metrics(PSI_PAYLOAD)
        self.assertEqual(metrics.largest_contentful_paint, "2.1 s")
        self.assertEqual(metrics.cumulative_layout_shift, "0.05")
        self.assertEqual(metrics.time_to_interactive, "4.8 s")
        self.assertEqual(metrics.interaction_to_next_paint, "N/A")
        self.assertEqual(metrics.final_url, "https://acme.test/")
        self.assertEqual(metrics.lighthouse_version, "12.0.0")

    def test_dom_issue_hints(self):
        metrics = normalize_lab_metrics(PSI_PAYLOAD)
        self.assertEqual(metrics.lcp_element.snippet, "<img src=hero.jpg>")
        self.assertEqual(metrics.lcp_element.rect.width, 320)
        # boundingRect가 없는 요소는 힌트 없음으로 건너뛴다.
        self.assertEqual([h.snippet for h in metrics.layout_shift_elements], ["<header>"])

    def test_empty_payload(self):
        metrics = normalize_lab_metrics({})
        self.assertEqual(metrics.score, 0)
        self.assertEqual(metrics.largest_contentful_paint, "N/A")
        self.assertIsNone(metrics.lcp_element)
        self.assertEqual(metrics.layout_shift_elements, [])


class TestPageSpeedClient(unittest.IsolatedAsyncioTestCase):
    async def test_run_audit_uses_service(self):
        service = MagicMock()
        service.pagespeedapi.return_value.runpagespeed.return_value.execute.return_value = PSI_PAYLOAD
        client = PageSpeedClient(PageSpeedSettings(api_key="key", strategy="mobile"), service=service)

        metrics = await client.run_audit("https://acme.test/")

        self.assertEqual(metrics.score, 87)
        service.pagespeedapi.return_value.runpagespeed.assert_called_once_with(
            url="https://acme.test/",
            strategy="MOBILE",
            category=["PERFORMANCE", "SEO", "ACCESSIBILITY", "BEST_PRACTICES"],
        )

    async def test_missing_key_raises(self):
        client = PageSpeedClient(PageSpeedSettings(api_key=""), service=MagicMock())
        with self.assertRaises(LabAuditError):
            await client.run_audit("https://acme.test/")

    async def test_http_error_is_wrapped(self):
        service = MagicMock()
        service.pagespeedapi.return_value.runpagespeed.return_value.execute.side_effect = HttpError(
            MagicMock(status=429, reason="quota"), b"quota exceeded"
        )
        client = PageSpeedClient(PageSpeedSettings(api_key="key"), service=service)
        with self.assertRaises(LabAuditError):
            await client.run_audit("https://acme.test/")


if __name__ == "__main__":
    unittest.main()
