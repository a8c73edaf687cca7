"""
Flask web application for the UK money calculators.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on ``config.WEB_HOST:WEB_PORT``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import urlencode

from flask import Flask, Response, abort, render_template_string, request

import config as cfg
import forms
import report
from catalog import CALCULATORS, Calculator

logger = logging.getLogger(__name__)

app = Flask(__name__)


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{ calc.title if calc else "UK Money Calculators" }}</title>
<style>
  *{margin:0;padding:0;box-sizing:border-box}
  :root{
    --bg:#f1f5f9;--card:#ffffff;--border:#e2e8f0;
    --text:#0f172a;--text2:#475569;--blue:#2563eb;--green:#16a34a;
    --radius:12px;
  }
  body{background:var(--bg);color:var(--text);
    font-family:system-ui,-apple-system,'Segoe UI',sans-serif;line-height:1.6}
  .container{max-width:980px;margin:0 auto;padding:2rem 1.25rem}
  header{margin-bottom:1.5rem}
  header a{color:var(--blue);text-decoration:none;font-size:.9rem}
  h1{font-size:1.9rem;font-weight:800;margin:.4rem 0}
  .lead{color:var(--text2)}
  .card{background:var(--card);border:1px solid var(--border);border-radius:var(--radius);
    padding:1.5rem;margin-bottom:1.25rem}
  .grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(260px,1fr));gap:1rem}
  .grid a{display:block;color:inherit;text-decoration:none}
  .grid a:hover .card{border-color:var(--blue)}
  .grid h3{font-size:1.05rem;margin-bottom:.3rem}
  .grid p{color:var(--text2);font-size:.88rem}
  .layout{display:grid;grid-template-columns:1fr 1fr;gap:1.25rem}
  @media(max-width:760px){.layout{grid-template-columns:1fr}}
  label{display:block;font-size:.85rem;font-weight:600;margin:.8rem 0 .3rem}
  input,select,textarea{width:100%;padding:.6rem .75rem;border:1px solid var(--border);
    border-radius:8px;font:inherit;background:#fff}
  textarea{min-height:7rem}
  button{margin-top:1.2rem;padding:.7rem 1.4rem;border:0;border-radius:8px;
    background:var(--blue);color:#fff;font-weight:700;cursor:pointer}
  table{width:100%;border-collapse:collapse;font-size:.92rem}
  td{padding:.45rem 0;border-bottom:1px solid var(--border)}
  td.value{text-align:right;font-weight:700;font-variant-numeric:tabular-nums}
  tr:first-child td.value{color:var(--green);font-size:1.15rem}
  .placeholder{color:var(--text2);font-style:italic}
  .exports{margin-top:1rem;font-size:.88rem}
  .exports a{color:var(--blue);margin-right:1rem}
  .chart img{width:100%;border-radius:8px}
  .faq details{border-bottom:1px solid var(--border);padding:.75rem 0}
  .faq summary{cursor:pointer;font-weight:600}
  .faq p{color:var(--text2);margin-top:.5rem}
  footer{color:var(--text2);font-size:.8rem;text-align:center;margin-top:2rem}
</style>
</head>
<body>
<div class="container">

{% if not calc %}
  <header>
    <h1>UK Money Calculators</h1>
    <p class="lead">Tax, property, loan and savings calculators for the {{ tax_year }} tax year.</p>
  </header>
  <div class="grid">
    {% for c in calculators %}
    <a href="{{ url_for('calculator', slug=c.slug) }}">
      <div class="card"><h3>{{ c.title }}</h3><p>{{ c.summary }}</p></div>
    </a>
    {% endfor %}
  </div>
{% else %}
  <header>
    <a href="{{ url_for('index') }}">&larr; All calculators</a>
    <h1>{{ calc.title }}</h1>
    <p class="lead">{{ calc.summary }}</p>
  </header>

  <div class="layout">
    <form class="card" method="post" action="{{ url_for('calculator', slug=calc.slug) }}">
      {% for f in calc.fields %}
        <label for="{{ f.name }}">{{ f.label }}</label>
        {% if f.kind == "choice" %}
          <select id="{{ f.name }}" name="{{ f.name }}">
            {% for key, text in f.choices %}
            <option value="{{ key }}" {% if form.get(f.name, f.default) == key %}selected{% endif %}>{{ text }}</option>
            {% endfor %}
          </select>
        {% elif f.kind == "items" %}
          <textarea id="{{ f.name }}" name="{{ f.name }}">{{ form.get(f.name, f.default) }}</textarea>
        {% else %}
          <input id="{{ f.name }}" name="{{ f.name }}" type="text" inputmode="decimal"
                 value="{{ form.get(f.name, f.default) }}">
        {% endif %}
      {% endfor %}
      <button type="submit">Calculate</button>
    </form>

    <div class="card">
      <h2 style="font-size:1.2rem;margin-bottom:.75rem">Results</h2>
      {% if rows %}
        <table>
          {% for label, value in rows %}
          <tr><td>{{ label }}</td><td class="value">{{ value }}</td></tr>
          {% endfor %}
        </table>
        <div class="exports">
          <a href="{{ url_for('export_csv', slug=calc.slug) }}?{{ query }}">Download CSV</a>
          <a href="{{ url_for('export_pdf', slug=calc.slug) }}?{{ query }}">Download PDF</a>
        </div>
      {% else %}
        <p class="placeholder">{{ calc.placeholder }}</p>
      {% endif %}
    </div>
  </div>

  {% for img in charts %}
  <div class="card chart"><img src="data:image/png;base64,{{ img }}" alt="Chart"></div>
  {% endfor %}

  {% if calc.faqs %}
  <div class="card faq">
    <h2 style="font-size:1.2rem">Frequently asked questions</h2>
    {% for q, a in calc.faqs %}
    <details {% if loop.first %}open{% endif %}><summary>{{ q }}</summary><p>{{ a }}</p></details>
    {% endfor %}
  </div>
  {% endif %}
{% endif %}

<footer>Estimates only, based on {{ tax_year }} rates for England. This is not financial advice.</footer>
</div>
<script>
// Only one FAQ answer open at a time
document.querySelectorAll('.faq details').forEach(function(d){
  d.addEventListener('toggle',function(){
    if(!d.open) return;
    document.querySelectorAll('.faq details').forEach(function(o){ if(o!==d) o.open=false; });
  });
});
</script>
</body>
</html>
"""


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════

def _lookup(slug: str) -> Calculator:
    calculator = CALCULATORS.get(slug)
    if calculator is None:
        logger.info("Unknown calculator requested: %s", slug)
        abort(404)
    return calculator


def _evaluate(calculator: Calculator, raw: Mapping[str, Any]):
    values = forms.parse_form(calculator.fields, raw)
    result = calculator.compute(values)
    logger.info("Computed %s (result=%s)", calculator.slug, "yes" if result is not None else "none")
    return result


def _submitted(calculator: Calculator, raw: Mapping[str, Any]) -> dict:
    """Submitted raw strings for the calculator's own fields."""
    return {f.name: raw[f.name] for f in calculator.fields if f.name in raw}


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/")
def index():
    return render_template_string(
        HTML_TEMPLATE,
        calc=None,
        calculators=list(CALCULATORS.values()),
        tax_year=cfg.TAX_YEAR,
    )


@app.route("/<slug>", methods=["GET", "POST"])
def calculator(slug: str):
    calc = _lookup(slug)
    raw = request.form if request.method == "POST" else request.args
    form = _submitted(calc, raw)
    result = _evaluate(calc, form)

    rows = calc.rows(result) if result is not None else []
    charts = report.get_web_charts(calc.charts(result)) if result is not None else []
    return render_template_string(
        HTML_TEMPLATE,
        calc=calc,
        form=form,
        rows=rows,
        charts=charts,
        query=urlencode(form),
        tax_year=cfg.TAX_YEAR,
    )


@app.route("/<slug>/export.csv")
def export_csv(slug: str):
    calc = _lookup(slug)
    result = _evaluate(calc, _submitted(calc, request.args))
    if result is None:
        return "Nothing to export for these inputs.", 404
    return Response(
        report.csv_bytes(calc.rows(result)),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={slug}.csv"},
    )


@app.route("/<slug>/export.pdf")
def export_pdf(slug: str):
    calc = _lookup(slug)
    result = _evaluate(calc, _submitted(calc, request.args))
    if result is None:
        return "Nothing to export for these inputs.", 404
    data = report.generate_pdf(calc.title, calc.rows(result), calc.charts(result))
    return Response(
        data,
        mimetype="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={slug}.pdf"},
    )


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = False, open_browser: bool = True) -> None:
    """Start the Flask development server and open a browser."""
    import threading
    import webbrowser

    url = f"http://{cfg.WEB_HOST}:{cfg.WEB_PORT}"
    logger.info("Starting web app at %s", url)
    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=cfg.WEB_HOST, port=cfg.WEB_PORT, debug=debug)


if __name__ == "__main__":
    run_web()
