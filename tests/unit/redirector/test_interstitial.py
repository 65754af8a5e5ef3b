"""Interstitial page rendering tests."""

from __future__ import annotations

import pytest

from simple_redirector.rendering import (
    COUNTDOWN_SECONDS,
    InterstitialRenderer,
    InterstitialTemplateError,
    TemplateFileNotFound,
    TemplateInvalid,
)


class TestDefaultTemplate:
    def test_contains_link_and_countdown(self):
        html = InterstitialRenderer().render('https://example.com/new')
        assert '<a href="https://example.com/new">https://example.com/new</a>' in html
        assert f'<span id="countdown">{COUNTDOWN_SECONDS}</span>' in html
        assert f'let seconds = {COUNTDOWN_SECONDS};' in html
        assert 'window.location = "https://example.com/new";' in html

    def test_hidden_marker(self):
        html = InterstitialRenderer().render('https://example.com')
        assert '<p hidden>Generated by simple-redirector.</p>' in html

    def test_escapes_markup(self):
        html = InterstitialRenderer().render('https://example.com/?q=<b>&x=1')
        assert '<b>' not in html
        assert '&lt;b&gt;' in html

    def test_script_value_is_json_encoded(self):
        html = InterstitialRenderer().render('https://example.com/"</script>')
        assert '</script>"' not in html

    def test_performance_mode_skips_escaping(self):
        renderer = InterstitialRenderer(performance_mode=True)
        html = renderer.render('https://example.com/?q=<b>')
        assert 'href="https://example.com/?q=<b>"' in html


class TestCustomTemplate:
    def test_file_template(self, fixtures_dir):
        renderer = InterstitialRenderer(fixtures_dir / 'countdown.html.j2')
        html = renderer.render('https://example.com')
        assert html == f'<a id="target" href="https://example.com">moved</a> in {COUNTDOWN_SECONDS}s\n'

    def test_missing_file(self, tmp_path):
        with pytest.raises(TemplateFileNotFound):
            InterstitialRenderer(tmp_path / 'missing.j2')

    def test_syntax_error(self, tmp_path):
        broken = tmp_path / 'broken.j2'
        broken.write_text('{% if redirect_uri %}unterminated', encoding='utf-8')
        with pytest.raises(TemplateInvalid):
            InterstitialRenderer(broken)

    def test_non_utf8_file(self, tmp_path):
        binary = tmp_path / 'binary.j2'
        binary.write_bytes(b'\xff\xfe\x00bad')
        with pytest.raises(TemplateInvalid):
            InterstitialRenderer(binary)

    def test_empty_path_uses_builtin(self):
        renderer = InterstitialRenderer('')
        assert renderer.template_path is None
        assert 'Generated by simple-redirector' in renderer.render('https://example.com')

    def test_errors_share_base_class(self, tmp_path):
        with pytest.raises(InterstitialTemplateError):
            InterstitialRenderer(tmp_path / 'missing.j2')
