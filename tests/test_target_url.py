import unittest

from drift.domain.target_url import InvalidTargetError, extract_domain, normalize_domain, normalize_url, origin_of


class TestTargetUrl(unittest.TestCase):
    def test_scheme_is_prepended(self):
        self.assertEqual(normalize_url("  acme.test/pricing "), "https://acme.test/pricing")
        self.assertEqual(normalize_url("http://acme.test"), "http://acme.test")

    def test_scheme_match_ignores_case(self):
        self.assertEqual(normalize_url("HTTPS://Acme.test/"), "HTTPS://Acme.test/")
        self.assertEqual(extract_domain(normalize_url("HTTPS://www.Acme.test/")), "acme.test")

    def test_invalid_urls(self):
        for raw in (None, "", "   ", "https://", "exa mple.com", "http://[::1"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidTargetError):
                    normalize_url(raw)

    def test_domain_strips_leading_www_and_lowercases(self):
        self.assertEqual(extract_domain("https://WWW.Acme.test/page"), "acme.test")
        self.assertEqual(extract_domain("https://shop.www.acme.test/"), "shop.www.acme.test")
        self.assertEqual(normalize_domain(" www.Example.com "), "example.com")

    def test_blank_domain_rejected(self):
        with self.assertRaises(InvalidTargetError):
            normalize_domain("  ")

    def test_origin(self):
        self.assertEqual(origin_of("https://acme.test:8443/a/b?c=1"), "https://acme.test:8443")


if __name__ == "__main__":
    unittest.main()
