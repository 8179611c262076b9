"""Tests for LCP preload tag generation."""
import json

import pytest
from bs4 import BeautifulSoup

from atf_optimizer.schemas.lcp import decode_lcp
from atf_optimizer.services.preload import PreloadResult, build_preload_tags


def _build(payload: dict) -> PreloadResult:
    return build_preload_tags(decode_lcp(json.dumps(payload)))


def _links(tags: str) -> list[dict]:
    soup = BeautifulSoup(tags, "lxml")
    return [link.attrs for link in soup.find_all("link")]


class TestBuildPreloadTags:
    def test_img(self):
        result = _build({"type": "img", "src": "https://example.com/hero.jpg"})
        assert result.tags == (
            '<link rel="preload" as="image" href="https://example.com/hero.jpg" '
            'fetchpriority="high">'
        )
        assert result.sources == ["https://example.com/hero.jpg"]

    def test_img_srcset(self):
        result = _build({
            "type": "img-srcset",
            "src": "https://example.com/hero.jpg",
            "srcset": "https://example.com/hero-480.jpg 480w, https://example.com/hero-800.jpg 800w",
            "sizes": "(max-width: 600px) 480px, 800px",
        })
        assert result.tags == (
            '<link rel="preload" as="image" href="https://example.com/hero.jpg" '
            'imagesrcset="https://example.com/hero-480.jpg 480w, https://example.com/hero-800.jpg 800w" '
            'imagesizes="(max-width: 600px) 480px, 800px" fetchpriority="high">'
        )
        assert result.sources == ["https://example.com/hero.jpg"]

    def test_bg_img_set_single_hint(self):
        result = _build({
            "type": "bg-img-set",
            "bg_set": [
                {"src": "https://example.com/bg-1x.jpg"},
                {"src": "https://example.com/bg-2x.jpg"},
            ],
        })
        links = _links(result.tags)
        assert len(links) == 1
        assert links[0]["imagesrcset"] == "https://example.com/bg-1x.jpg,https://example.com/bg-2x.jpg"
        assert "href" not in links[0]
        assert result.sources == ["https://example.com/bg-1x.jpg", "https://example.com/bg-2x.jpg"]

    def test_bg_img_one_hint_per_entry(self):
        result = _build({
            "type": "bg-img",
            "bg_set": [
                {"src": "https://example.com/layer-1.png"},
                {"src": "https://example.com/layer-2.png"},
            ],
        })
        assert result.tags == (
            '<link rel="preload" as="image" href="https://example.com/layer-1.png" fetchpriority="high">'
            '<link rel="preload" as="image" href="https://example.com/layer-2.png" fetchpriority="high">'
        )
        assert result.sources == ["https://example.com/layer-1.png", "https://example.com/layer-2.png"]

    def test_picture(self):
        result = _build({
            "type": "picture",
            "src": "https://example.com/large.jpg",
            "sources": [
                {"srcset": "https://example.com/small.jpg", "media": "(max-width: 600px)"},
                {"srcset": "https://example.com/medium.jpg", "media": "(max-width: 900px)"},
            ],
        })
        links = _links(result.tags)
        assert [(l["href"], l["media"]) for l in links] == [
            ("https://example.com/small.jpg", "(max-width: 600px)"),
            ("https://example.com/medium.jpg", "(min-width: 600.1px) and (max-width: 900px)"),
            ("https://example.com/large.jpg", "(min-width: 900.1px)"),
        ]
        assert all(l["fetchpriority"] == "high" for l in links)
        assert result.sources == [
            "https://example.com/small.jpg",
            "https://example.com/medium.jpg",
            "https://example.com/large.jpg",
        ]

    @pytest.mark.parametrize("payload", [None, "", "not found", "{broken", "[]", '{"type": "video"}'])
    def test_no_usable_descriptor(self, payload):
        result = build_preload_tags(decode_lcp(payload))
        assert result.tags == ""
        assert result.sources == []

    def test_attribute_values_escaped(self):
        src = 'https://example.com/a.jpg?x=1&y="><script>'
        result = _build({"type": "img", "src": src})
        assert "<script>" not in result.tags
        assert "&amp;y=&quot;&gt;" in result.tags
        assert _links(result.tags)[0]["href"] == src
        assert result.sources == [src]
