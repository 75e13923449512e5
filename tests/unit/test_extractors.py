"""Tests for site-specific extractors."""

import pytest
from bs4 import BeautifulSoup

from notices_scraper.core.models import DataSource
from notices_scraper.extractors import (
    REGISTRY,
    CBICExtractor,
    ExtractorRegistry,
    GenericExtractor,
    IncomeTaxExtractor,
    MahaGSTExtractor,
    PIBExtractor,
    RBIExtractor,
    SEBIExtractor,
)


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def make_source(url: str, name: str = "Test Source", category: str = "central") -> DataSource:
    return DataSource(name=name, url=url, category=category)


class TestRegistry:
    """Tests for domain routing."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://incometaxindia.gov.in/Lists/Circulars/AllItems.aspx", IncomeTaxExtractor),
            ("https://www.rbi.org.in/Scripts/NotificationUser.aspx", RBIExtractor),
            ("https://www.cbic.gov.in/htdocs-cbec/gst/", CBICExtractor),
            ("https://www.sebi.gov.in/sebiweb/home/HomeAction.do?doListing=yes&sid=2", SEBIExtractor),
            ("https://mahagst.gov.in/en/notifications", MahaGSTExtractor),
            ("https://pib.gov.in/AllRelease.aspx", PIBExtractor),
            ("https://irdai.gov.in/circulars", GenericExtractor),
            ("https://www.finmin.gov.in/", GenericExtractor),
        ],
    )
    def test_routing(self, url, expected):
        assert isinstance(REGISTRY.get_extractor_for_url(url), expected)

    def test_matches_host_not_path(self):
        url = "https://example.org/mirror/rbi.org.in/page"
        assert isinstance(REGISTRY.get_extractor_for_url(url), GenericExtractor)

    def test_registered_extractors(self):
        assert REGISTRY.count() == 6
        assert "GenericExtractor" not in REGISTRY.list_extractors()

    def test_register_rejects_non_extractor(self):
        with pytest.raises(TypeError):
            ExtractorRegistry().register(object())

    def test_no_default_raises(self):
        with pytest.raises(LookupError):
            ExtractorRegistry().get_extractor_for_url("https://unknown.gov.in/")


class TestIncomeTaxExtractor:
    SOURCE = make_source(
        "https://incometaxindia.gov.in/Lists/Circulars/AllItems.aspx",
        name="Income Tax Circulars",
    )

    HTML = """
    <table class="ms-listviewtable">
      <tr><th>Title</th><th>Date</th></tr>
      <tr>
        <td><a href="/communications/circular/circular-1-2024.pdf">Circular No. 1/2024</a></td>
        <td>15-01-2024</td>
      </tr>
      <tr>
        <td><a href="https://incometaxindia.gov.in/c2.pdf">  Circular   No. 2/2024 </a></td>
        <td></td>
      </tr>
      <tr><td><a href="">Broken link</a></td><td>01-01-2024</td></tr>
      <tr><td><a href="/x.pdf"></a></td><td>01-01-2024</td></tr>
    </table>
    """

    def test_extracts_rows(self):
        items = IncomeTaxExtractor().extract(soup_of(self.HTML), self.SOURCE, 10)

        assert len(items) == 2
        assert items[0].title == "Circular No. 1/2024"
        assert items[0].url == "https://incometaxindia.gov.in/communications/circular/circular-1-2024.pdf"
        assert items[0].date == "15-01-2024"
        assert items[0].source == "Income Tax Circulars"
        assert items[0].category == "central"
        assert items[0].parsed_date is None

    def test_whitespace_collapsed_and_empty_date_absent(self):
        items = IncomeTaxExtractor().extract(soup_of(self.HTML), self.SOURCE, 10)
        assert items[1].title == "Circular No. 2/2024"
        assert items[1].date is None

    def test_stops_at_max_items(self):
        items = IncomeTaxExtractor().extract(soup_of(self.HTML), self.SOURCE, 1)
        assert len(items) == 1


class TestRBIExtractor:
    SOURCE = make_source(
        "https://www.rbi.org.in/Scripts/NotificationUser.aspx",
        name="RBI Notifications",
        category="regulators",
    )

    HTML = """
    <table>
      <tr><td>Date</td><td><a href="/Scripts/NotificationUser.aspx">Notifications</a></td></tr>
      <tr>
        <td>Jan 12, 2024</td>
        <td><a href="NotificationUser.aspx?Id=12590">Master Direction - KYC (Amendment)</a></td>
      </tr>
      <tr>
        <td>10.01.2024</td>
        <td><a href="/Scripts/BS_ViewMasCirculardetails.aspx?id=1">Exposure norms</a></td>
      </tr>
    </table>
    """

    def test_skips_notification_rows_and_resolves_urls(self):
        items = RBIExtractor().extract(soup_of(self.HTML), self.SOURCE, 10)

        assert [i.title for i in items] == ["Master Direction - KYC (Amendment)", "Exposure norms"]
        assert items[0].url == "https://www.rbi.org.in/Scripts/NotificationUser.aspx?Id=12590"
        assert items[1].url == "https://www.rbi.org.in/Scripts/BS_ViewMasCirculardetails.aspx?id=1"
        assert items[0].date == "Jan 12, 2024"
        assert items[1].date == "10.01.2024"


class TestSEBIExtractor:
    def test_date_in_first_cell(self):
        html = """
        <table>
          <tr><td>Jan 15, 2024</td><td><a href="/legal/circulars/jan-2024/x.html">Circular on X</a></td></tr>
        </table>
        """
        source = make_source("https://www.sebi.gov.in/sebiweb/home/HomeAction.do", name="SEBI Circulars")
        items = SEBIExtractor().extract(soup_of(html), source, 5)

        assert items[0].url == "https://www.sebi.gov.in/legal/circulars/jan-2024/x.html"
        assert items[0].date == "Jan 15, 2024"


class TestCBICExtractor:
    SOURCE = make_source("https://www.cbic.gov.in/htdocs-cbec/gst/", name="CBIC GST")

    HTML = """
    <ul>
      <li><a href="/htdocs-cbec/gst/home">Home</a></li>
      <li><a href="notfctn-1-2024.pdf">Notification No. 1/2024-Central Tax</a></li>
      <li><a href="javascript:void(0)">Expand all sections here</a></li>
    </ul>
    <div class="contentpaneopen">
      <a href="/htdocs-cbec/gst/circ-200.pdf">Circular No. 200/12/2024-GST</a>
    </div>
    """

    def test_filters_short_titles_and_resolves_relative(self):
        items = CBICExtractor().extract(soup_of(self.HTML), self.SOURCE, 10)

        assert [i.title for i in items] == [
            "Notification No. 1/2024-Central Tax",
            "Circular No. 200/12/2024-GST",
        ]
        assert items[0].url == "https://www.cbic.gov.in/notfctn-1-2024.pdf"
        assert items[1].url == "https://www.cbic.gov.in/htdocs-cbec/gst/circ-200.pdf"
        assert all(i.date is None for i in items)

    def test_bare_relative_href_joins_site_root(self):
        html = '<ul><li><a href="notfns-2024/cgst-01.pdf">Notification No. 01/2024-Central Tax</a></li></ul>'
        items = CBICExtractor().extract(soup_of(html), self.SOURCE, 10)

        assert items[0].url == "https://www.cbic.gov.in/notfns-2024/cgst-01.pdf"


class TestMahaGSTExtractor:
    SOURCE = make_source(
        "https://mahagst.gov.in/en/notifications",
        name="Maharashtra GST Notifications",
        category="maharashtra",
    )

    HTML = """
    <article>
      <a href="/en/notification/trade-circular-1t-2024">Trade Circular 1T of 2024</a>
      <span class="date">15 January 2024</span>
    </article>
    <div class="notification-item">
      <h4>Amnesty scheme extended</h4>
      <a href="/en/amnesty"><img src="icon.png"></a>
      <time>January 20, 2024</time>
    </div>
    <div class="update-item"><h3>No link here</h3></div>
    """

    def test_link_heading_and_date(self):
        items = MahaGSTExtractor().extract(soup_of(self.HTML), self.SOURCE, 10)

        assert len(items) == 2
        assert items[0].title == "Trade Circular 1T of 2024"
        assert items[0].url == "https://mahagst.gov.in/en/notification/trade-circular-1t-2024"
        assert items[0].date == "15 January 2024"
        assert items[1].title == "Amnesty scheme extended"
        assert items[1].date == "January 20, 2024"
        assert items[1].category == "maharashtra"


class TestPIBExtractor:
    def test_links_and_rows(self):
        html = """
        <div class="content-area">
          <a href="/PressReleasePage.aspx?PRID=1">Finance Ministry releases GST collection data</a>
          <a href="/short">Short</a>
        </div>
        <table><tr><td><a href="/PressReleasePage.aspx?PRID=2">Cabinet approves amendment to customs rules</a></td></tr></table>
        """
        source = make_source("https://pib.gov.in/AllRelease.aspx", name="Press Information Bureau")
        items = PIBExtractor().extract(soup_of(html), source, 10)

        assert [i.url for i in items] == [
            "https://pib.gov.in/PressReleasePage.aspx?PRID=1",
            "https://pib.gov.in/PressReleasePage.aspx?PRID=2",
        ]


class TestGenericExtractor:
    SOURCE = make_source("https://irdai.gov.in/circulars", name="IRDAI", category="regulators")

    HTML = """
    <nav><a href="/about">About us and our organisation</a><a href="/order">Order</a></nav>
    <a href="/docs/c1.pdf">Circular on health insurance claim settlement</a>
    <a>Notification without any link target</a>
    <a href="https://irdai.gov.in/docs/a2.pdf">Amendment to IRDAI (Insurance Products) Regulations</a>
    <a href="docs/o3.pdf">ORDER IN THE MATTER OF XYZ INSURANCE</a>
    """

    def test_keyword_and_length_filter(self):
        items = GenericExtractor().extract(soup_of(self.HTML), self.SOURCE, 10)

        assert [i.title for i in items] == [
            "Circular on health insurance claim settlement",
            "Amendment to IRDAI (Insurance Products) Regulations",
            "ORDER IN THE MATTER OF XYZ INSURANCE",
        ]
        assert items[0].url == "https://irdai.gov.in/docs/c1.pdf"
        assert items[2].url == "https://irdai.gov.in/docs/o3.pdf"

    def test_uses_source_origin(self):
        source = make_source("https://www.finmin.gov.in/", name="Ministry of Finance")
        html = '<a href="/notif/1">Notification regarding customs duty rates</a>'
        items = GenericExtractor().extract(soup_of(html), source, 5)
        assert items[0].url == "https://www.finmin.gov.in/notif/1"

    def test_zero_max_items(self):
        assert GenericExtractor().extract(soup_of(self.HTML), self.SOURCE, 0) == []


class TestCommonRules:
    """Rules shared by every extractor."""

    EXTRACTORS = [
        IncomeTaxExtractor,
        RBIExtractor,
        SEBIExtractor,
        CBICExtractor,
        MahaGSTExtractor,
        PIBExtractor,
        GenericExtractor,
    ]

    HTML = """
    <table>
      <tr><td>01-01-2024</td><td><a href="">Notification amendment circular missing href</a></td></tr>
      <tr><td>01-01-2024</td><td><a href="/ok"></a></td></tr>
    </table>
    <article><a href="">Notification amendment circular missing href</a></article>
    <div class="content-area"><a>Notification amendment circular missing href</a></div>
    """

    @pytest.mark.parametrize("extractor_cls", EXTRACTORS)
    def test_half_populated_candidates_dropped(self, extractor_cls):
        source = make_source("https://www.rbi.org.in/x")
        items = extractor_cls().extract(soup_of(self.HTML), source, 10)
        assert items == []

    @pytest.mark.parametrize("extractor_cls", EXTRACTORS)
    def test_urls_are_absolute(self, extractor_cls):
        html = """
        <table><tr><td>01-01-2024</td><td><a href="/docs/notification-amendment-circular-1.pdf">Circular amendment number one</a></td></tr></table>
        <article><a href="docs/notification-amendment-circular-2.pdf">Circular amendment number two</a></article>
        <div class="content-area"><a href="/docs/3.pdf">Circular amendment number three</a></div>
        <ul><li><a href="docs/4.pdf">Circular amendment number four</a></li></ul>
        """
        source = make_source("https://state.gov.in/notices/list.aspx")
        items = extractor_cls().extract(soup_of(html), source, 10)

        assert items
        assert all(i.url.startswith("https://state.gov.in/") for i in items)
