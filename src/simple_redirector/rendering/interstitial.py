"""Interstitial "this page has moved" countdown page.

The page links to the redirect target and navigates there automatically
after ``COUNTDOWN_SECONDS``. A custom Jinja2 template file may replace
the built-in one; it is rendered with a single variable, ``redirect_uri``.

Performance mode renders with autoescaping disabled. Only use it with
trusted mapping files.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

COUNTDOWN_SECONDS = 15

# The hidden paragraph at the bottom identifies pages produced by this service.
DEFAULT_TEMPLATE = """\
<html>
<head>
	<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
</head>
<body>
<p>The page you reached has moved to <a href="{{ redirect_uri }}">{{ redirect_uri }}</a>, please update your bookmarks.</p>
<p>You will be automatically redirected to {{ redirect_uri }} in <span id="countdown">{{ countdown }}</span> seconds.</p>
<p>Or click <a href="{{ redirect_uri }}">THIS LINK</a> to go there now.</p>
<script type="text/javascript">
	let seconds = {{ countdown }};

	function countdown() {
		seconds = seconds - 1;
		if (seconds < 0) {
			window.location = {{ redirect_uri|tojson }};
		} else {
			document.getElementById("countdown").innerHTML = seconds.toString();
			window.setTimeout(countdown, 1000);
		}
	}
	countdown();
</script>
<p hidden>Generated by simple-redirector.</p>
</body>
</html>
"""


class InterstitialTemplateError(ValueError):
    """Base class for interstitial template problems found at startup."""


class TemplateFileNotFound(InterstitialTemplateError):
    """Raised when a custom template file cannot be read."""


class TemplateInvalid(InterstitialTemplateError):
    """Raised when a template does not compile."""


class InterstitialRenderer:
    """Compile the interstitial template once and render it per request.

    Args:
        template_path: Optional Jinja2 template file replacing the
            built-in page.
        performance_mode: Disable HTML autoescaping.
    """

    def __init__(
        self,
        template_path: str | Path | None = None,
        *,
        performance_mode: bool = False,
    ) -> None:
        self.template_path = Path(template_path) if template_path else None
        self.performance_mode = performance_mode

        environment = jinja2.Environment(
            autoescape=not performance_mode,
            keep_trailing_newline=True,
        )
        source = self._read_source()
        try:
            self._template = environment.from_string(source)
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateInvalid(
                f'Could not compile template [{self.template_path or "built-in"}]: {exc}'
            ) from exc

    def render(self, redirect_uri: str) -> str:
        return self._template.render(
            redirect_uri=redirect_uri,
            countdown=COUNTDOWN_SECONDS,
        )

    def _read_source(self) -> str:
        if self.template_path is None:
            return DEFAULT_TEMPLATE
        try:
            return self.template_path.read_text(encoding='utf-8')
        except OSError as exc:
            raise TemplateFileNotFound(
                f'Could not read template file [{self.template_path}]: '
                f'{exc.strerror or exc}'
            ) from exc
        except UnicodeDecodeError as exc:
            raise TemplateInvalid(
                f'Template file [{self.template_path}] is not UTF-8: {exc}'
            ) from exc
