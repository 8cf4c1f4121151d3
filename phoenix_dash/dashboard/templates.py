from __future__ import annotations

from jinja2 import DictLoader, Environment, select_autoescape

CHART_WIDTH = 600
CHART_HEIGHT = 160

_BASE = """<!doctype html><html><head><meta charset='utf-8'>
{% block head %}{% endblock %}
<title>Phoenix Dashboard</title>
<style>
body{font-family:system-ui;background:#0f172a;color:#e2e8f0;padding:16px;margin:0}
.card{background:#1e293b;border-radius:8px;padding:12px;margin-bottom:12px}
.grid{display:grid;grid-template-columns:repeat(auto-fit,minmax(160px,1fr));gap:8px}
.label{color:#94a3b8;font-size:12px}.value{font-size:20px;font-weight:600}
.status{padding:4px 10px;border-radius:6px;font-weight:700}
.status.running{background:#14532d;color:#22c55e}.status.stopped{background:#450a0a;color:#ef4444}
table{width:100%;border-collapse:collapse}td,th{padding:8px;text-align:left}
tr{border-bottom:1px solid rgba(255,255,255,0.05)}
.log-entry{font-family:monospace;font-size:12px}.log-time{color:#64748b}
.log-type-PLACE{color:#3b82f6}.log-type-CANCEL{color:#f59e0b}
.log-type-FILL{color:#22c55e}.log-type-RISK{color:#ef4444}
.notice{background:#14532d;padding:8px;border-radius:6px}
textarea{width:100%;min-height:420px;background:#0b1220;color:#e2e8f0;font-family:monospace}
</style></head><body>
{% for message in notices %}<p class='notice'>{{ message }}</p>{% endfor %}
{% block body %}{% endblock %}
</body></html>"""

_MACROS = """
{% macro node(n) -%}
<{{ n.tag }}{% if n.classes %} class="{{ n.classes|join(' ') }}"{% endif %}{% if n.color %} style="color:{{ n.color }}"{% endif %}>{{ n.text }}{% for c in n.children %}{{ node(c) }}{% endfor %}</{{ n.tag }}>
{%- endmacro %}
{% macro field(doc, id, title) -%}
{% set el = doc.get(id) %}
<div><div class='label'>{{ title }}</div><div class='value' id='{{ id }}'{% if el.color %} style="color:{{ el.color }}"{% endif %}>{{ el.text or '-' }}</div></div>
{%- endmacro %}
{% macro chart(doc, id, title) -%}
{% set frame = doc.get(id).chart %}
<div class='card'><div class='label'>{{ title }}</div>
<svg id='{{ id }}' viewBox='0 0 {{ width }} {{ height }}' width='100%' height='{{ height }}' preserveAspectRatio='none'>
{% if frame %}{% for spec, lines in frame.polylines(width, height) %}{% for points in lines %}
<polyline fill='none' stroke='{{ spec.color }}' stroke-width='2'{% if spec.dashed %} stroke-dasharray='5,5'{% endif %} points='{{ points }}'/>
{% endfor %}{% endfor %}{% endif %}
</svg>
{% if frame and frame.legend %}<div class='label'>{% for ds in frame.datasets %}<span style="color:{{ ds.spec.color }}">&#9632; {{ ds.spec.label }}</span> {% endfor %}</div>{% endif %}
</div>
{%- endmacro %}
"""

_INDEX = """{% extends 'base.html' %}
{% block head %}<meta http-equiv='refresh' content='{{ refresh }}'>{% endblock %}
{% block body %}
{% from 'macros.html' import node, field, chart %}
{% set indicator = doc.get('status-indicator') %}
<div class='card'>
<span id='status-indicator' class='{{ indicator.class_name or "status" }}'>{{ indicator.text or '...' }}</span>
<span id='pid-display'>{{ doc.get('pid-display').text or 'PID: -' }}</span>
<a href='/confirm/start'>Start</a> <a href='/confirm/stop'>Stop</a> <a href='/config'>Config</a>
</div>
<div class='card grid'>
{{ field(doc, 'val-net-value', 'Net Value') }}
{{ field(doc, 'val-total-pnl', 'Total PnL') }}
{{ field(doc, 'val-unrealized-pnl', 'Unrealized PnL') }}
{{ field(doc, 'val-position', 'Position') }}
{{ field(doc, 'val-entry-price', 'Entry Price') }}
{{ field(doc, 'val-current-price', 'Current Price') }}
</div>
<div class='card grid'>
{{ field(doc, 'val-active-orders', 'Active Orders') }}
{{ field(doc, 'val-orders-min', 'Orders/Min') }}
{{ field(doc, 'val-total-placed', 'Total Placed') }}
{{ field(doc, 'val-total-canceled', 'Total Canceled') }}
{{ field(doc, 'val-total-filled', 'Total Filled') }}
{{ field(doc, 'val-risk-triggers', 'Risk Triggers') }}
</div>
{{ chart(doc, 'chart-activity', 'Orders/Min') }}
{{ chart(doc, 'chart-price', 'Price') }}
<div class='card'><table id='tradeTable'>
<thead><tr><th>Time</th><th>Symbol</th><th>Side</th><th>Price</th><th>Qty</th><th>PnL</th></tr></thead>
<tbody>{% for row in doc.get('trade-table').children %}{{ node(row) }}{% endfor %}</tbody>
</table></div>
<div class='card' id='event-log'>{% for entry in doc.get('event-log').children %}{{ node(entry) }}{% endfor %}</div>
{% endblock %}"""

_CONFIRM = """{% extends 'base.html' %}
{% block body %}
<div class='card'>
<p>{{ prompt }}</p>
<form method='post' action='{{ action }}'>
<button type='submit' name='confirm' value='yes'>OK</button>
<a href='/'>Cancel</a>
</form>
</div>
{% endblock %}"""

_CONFIG = """{% extends 'base.html' %}
{% block body %}
<div class='card'>
<a href='/'>Back</a>
<form method='post' action='/config'>
<textarea id='config-editor' name='content'>{{ content }}</textarea>
<label><input type='checkbox' name='confirm' value='yes'> {{ prompt }}</label>
<button type='submit'>Save</button>
</form>
</div>
{% endblock %}"""

env = Environment(
    loader=DictLoader(
        {
            "base.html": _BASE,
            "macros.html": _MACROS,
            "index.html": _INDEX,
            "confirm.html": _CONFIRM,
            "config.html": _CONFIG,
        }
    ),
    autoescape=select_autoescape(default=True, default_for_string=True),
)
env.globals.update(width=CHART_WIDTH, height=CHART_HEIGHT, notices=())


def render(name: str, **context) -> str:
    return env.get_template(name).render(**context)
