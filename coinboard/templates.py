"""Jinja2 templates for dashboard HTML."""

from jinja2 import DictLoader, Environment, StrictUndefined, Template

TABLE_TEMPLATE = (
    '<div data-slot="table-container">'
    '<table data-slot="table"{% if table.table_class_name %} class="{{ table.table_class_name }}"{% endif %}>'
    '<thead data-slot="table-header">'
    '<tr data-slot="table-row"{% if table.header_row_class_name %} class="{{ table.header_row_class_name }}"{% endif %}>'
    '{% for cell in table.header %}'
    '<th data-slot="table-head"{% if cell.class_name %} class="{{ cell.class_name }}"{% endif %}>'
    '{{ "" if cell.content is none else cell.content }}</th>'
    '{% endfor %}'
    '</tr></thead>'
    '<tbody data-slot="table-body">'
    '{% for row in table.rows %}'
    '<tr data-slot="table-row"{% if table.body_row_class_name %} class="{{ table.body_row_class_name }}"{% endif %}'
    ' data-key="{{ row.key }}">'
    '{% for cell in row.cells %}'
    '<td data-slot="table-cell"{% if cell.class_name %} class="{{ cell.class_name }}"{% endif %}>'
    '{{ "" if cell.content is none else cell.content }}</td>'
    '{% endfor %}'
    '</tr>'
    '{% endfor %}'
    '</tbody></table></div>'
)

SECTION_TEMPLATE = (
    '<section><h4>{{ result["name"] }}</h4>'
    '{% if failed %}<div class="section-error">{{ result["error"] or "" }}</div>'
    '{% else %}{{ body }}{% endif %}'
    '</section>'
)

TRENDING_NAME_CELL_TEMPLATE = (
    '<a href="/coins/{{ item.id }}">'
    '<img src="{{ item.large }}" alt="{{ item.name }}" width="36" height="36">'
    '<p>{{ item.name }}</p>'
    '</a>'
)

TRENDING_CHANGE_CELL_TEMPLATE = (
    '<div class="price-change {{ "text-green-500" if is_trending_up else "text-red-500" }}">'
    '<p>{% if is_trending_up %}&#9650;{% else %}&#9660;{% endif %}</p>'
    '<p>{{ percentage }}</p>'
    '</div>'
)

env = Environment(
    loader=DictLoader({
        'table.html': TABLE_TEMPLATE,
        'section.html': SECTION_TEMPLATE,
        'trending_name_cell.html': TRENDING_NAME_CELL_TEMPLATE,
        'trending_change_cell.html': TRENDING_CHANGE_CELL_TEMPLATE,
    }),
    autoescape=True,  # Escape everything not marked safe
    undefined=StrictUndefined,  # Raise on undefined variables
)


def get_template(name: str) -> Template:
    return env.get_template(name)
