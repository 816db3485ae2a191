"""Shared fixtures: synthetic ASP.NET NAV listing pages."""

import pytest

NEXT_TARGET = "ctl00$ContentPlaceHolder1$gvNAV$ctl13$lnkNext"


def build_page(
    rows=(),
    next_target: str | None = None,
    view_state: str | None = "dDwtMTA4NzQ0NjE=",
    event_validation: str | None = "/wEdAAW1Lz0+",
    generator: str | None = "C2EE9ABB",
    extra_hidden: dict[str, str] | None = None,
    escaped_quotes: bool = False,
) -> str:
    """Render a listing page shaped like the upstream ASP.NET grid.

    ``rows`` are (date, name, option, nav_text) tuples. When ``next_target``
    is given, a pager "Next" link posting back to it is rendered.
    """
    hidden = []
    if view_state is not None:
        hidden.append(
            f'<input type="hidden" name="__VIEWSTATE" id="__VIEWSTATE" value="{view_state}" />'
        )
    if generator is not None:
        hidden.append(
            f'<input type="hidden" name="__VIEWSTATEGENERATOR" id="__VIEWSTATEGENERATOR" value="{generator}" />'
        )
    if event_validation is not None:
        hidden.append(
            f'<input type="hidden" name="__EVENTVALIDATION" id="__EVENTVALIDATION" value="{event_validation}" />'
        )
    hidden.append('<input type="hidden" name="__EVENTTARGET" id="__EVENTTARGET" value="" />')
    hidden.append('<input type="hidden" name="__EVENTARGUMENT" id="__EVENTARGUMENT" value="" />')
    for name, value in (extra_hidden or {}).items():
        hidden.append(f'<input type="hidden" name="{name}" value="{value}" />')

    body_rows = "\n".join(
        f"""      <tr>
        <td>{date}</td>
        <td>  {name}  </td>
        <td> {option} </td>
        <td class="rightAlign"> {nav} </td>
      </tr>"""
        for date, name, option, nav in rows
    )

    pager = ""
    if next_target is not None:
        if escaped_quotes:
            href = f"javascript:__doPostBack(&#39;{next_target}&#39;,&#39;&#39;)"
        else:
            href = f"javascript:__doPostBack('{next_target}','')"
        pager = f'<tr class="pager"><td colspan="4"><a href="{href}">Next</a></td></tr>'

    return f"""<!DOCTYPE html>
<html>
<head><title>Latest NAV</title></head>
<body>
  <form method="post" action="./latestnav" id="form1">
    <div class="aspNetHidden">
      {"".join(hidden)}
    </div>
    <table class="navTable">
      <tr><th>Date</th><th>Scheme</th><th>Option</th><th>NAV</th></tr>
{body_rows}
      {pager}
    </table>
  </form>
</body>
</html>
"""


@pytest.fixture
def make_page():
    """Factory fixture returning ``build_page``."""
    return build_page
