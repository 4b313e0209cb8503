# ============================================================================
# CRUD PACKAGE GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section generator - PL/SQL access package
# PURPOSE: p_<table> package specification + body returning JSON responses
# CREATED: 15 OCT 2026
# ============================================================================
"""
CRUD Package Generator

Emits a two-part PL/SQL package per table with a primary key:

    CREATE OR REPLACE PACKAGE p_orders AS ... END p_orders;
    /
    CREATE OR REPLACE PACKAGE BODY p_orders AS ... END p_orders;
    /

Public functions (all RETURN CLOB holding a JSON response):
    create_record   inputs = non-system-managed fields
    update_record   primary key(s) + non-key inputs
    delete_record   primary key(s)
    get_record      primary key(s)
    get_records     p_page, p_page_size, p_sort_by, p_sort_order,
                    p_query, p_search_type

Private helpers, in body order:
    build_response          JSON envelope {status, http_status, message, data, meta}
    handle_all_exceptions   SQLCODE -> HTTP-like status
    validate_data           required / length / allowed values / FK existence
    get_record_object       one row as JSON_OBJECT_T, FK rows nested via LEFT JOIN

Application error codes:
    -20001  validation failure          400
    -20002  record not found            404
    -20003  referenced row missing      422
    -20004  invalid sort column         400
    -1      unique constraint violated  409

Names, parameter lists and checks are computed here; the Jinja2 templates
only lay the text out.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from core.contracts import TypeCategory
from core.models import FieldDefinition, TableDefinition
from core.schema.ddl_utils import LiteralFormatter, ObjectNames, shorten_identifier
from generator.engine.templates import SqlTemplateRenderer, get_renderer
from generator.sections.base import GenerationContext, ScriptGenerator

logger = logging.getLogger(__name__)

JSON_DATE_FORMAT = 'YYYY-MM-DD"T"HH24:MI:SS'

_PARAM_INDENT = " " * 6
_CLOSE_INDENT = " " * 3


# ============================================================================
# TEMPLATES
# ============================================================================

_SPEC_TEMPLATE = """\
CREATE OR REPLACE PACKAGE {{ package }} AS

{% for signature in signatures %}
   {{ signature }};

{% endfor %}
END {{ package }};
/"""

_BODY_TEMPLATE = """\
CREATE OR REPLACE PACKAGE BODY {{ package }} AS

{% for unit in units %}
{{ unit }}

{% endfor %}
END {{ package }};
/"""

_BUILD_RESPONSE_TEMPLATE = """\
   FUNCTION build_response (
      p_status      IN VARCHAR2,
      p_http_status IN NUMBER,
      p_message     IN VARCHAR2,
      p_data        IN JSON_ELEMENT_T DEFAULT NULL,
      p_meta        IN JSON_OBJECT_T DEFAULT NULL
   ) RETURN CLOB IS
      l_response JSON_OBJECT_T := JSON_OBJECT_T();
   BEGIN
      l_response.put('status', p_status);
      l_response.put('http_status', p_http_status);
      l_response.put('message', p_message);
      IF p_data IS NOT NULL THEN
         l_response.put('data', p_data);
      END IF;
      IF p_meta IS NOT NULL THEN
         l_response.put('meta', p_meta);
      END IF;
      RETURN l_response.to_clob();
   END build_response;"""

_EXCEPTIONS_TEMPLATE = """\
   FUNCTION handle_all_exceptions RETURN CLOB IS
      l_message VARCHAR2(4000) := REGEXP_REPLACE(SQLERRM, '^ORA-[0-9]+: ');
   BEGIN
      CASE SQLCODE
{% for code, status, message in mappings %}
         WHEN {{ code }} THEN
            RETURN build_response('error', {{ status }}, {{ message }});
{% endfor %}
         ELSE
            RETURN build_response('error', 500, 'Record operation failed: ' || l_message);
      END CASE;
   END handle_all_exceptions;"""

_VALIDATE_TEMPLATE = """\
   PROCEDURE validate_data {{ parameters }} IS
{% if references %}
      l_count NUMBER;
{% endif %}
   BEGIN
{% for check in required %}
      IF {{ check.param }} IS NULL THEN
         RAISE_APPLICATION_ERROR(-20001, {{ check.message | sql_quote }});
      END IF;
{% endfor %}
{% for check in lengths %}
      IF LENGTH({{ check.param }}) > {{ check.limit }} THEN
         RAISE_APPLICATION_ERROR(-20001, {{ check.message | sql_quote }});
      END IF;
{% endfor %}
{% for check in allowed %}
      IF {{ check.param }} IS NOT NULL AND {{ check.param }} NOT IN ({{ check["values"] | map("sql_literal") | join(", ") }}) THEN
         RAISE_APPLICATION_ERROR(-20001, {{ check.message | sql_quote }});
      END IF;
{% endfor %}
{% for check in references %}
      IF {{ check.param }} IS NOT NULL THEN
         SELECT COUNT(*)
           INTO l_count
           FROM {{ check.target }}
          WHERE {{ check.column }} = {{ check.param }};
         IF l_count = 0 THEN
            RAISE_APPLICATION_ERROR(-20003, {{ check.message | sql_quote }});
         END IF;
      END IF;
{% endfor %}
{% if not (required or lengths or allowed or references) %}
      NULL;
{% endif %}
   END validate_data;"""

_RECORD_OBJECT_TEMPLATE = """\
   FUNCTION get_record_object {{ parameters }} RETURN JSON_OBJECT_T IS
      l_object JSON_OBJECT_T;
{% if joins %}
      l_ref    JSON_OBJECT_T;
{% endif %}
   BEGIN
      FOR rec IN (
         SELECT {{ select_list }}
           FROM {{ table }} t
{% for join in joins %}
           LEFT JOIN {{ join.target }} {{ join.alias }}
             ON {{ join.alias }}.{{ join.column }} = t.{{ join.source }}
{% endfor %}
          WHERE {{ key_match }}
      ) LOOP
         l_object := JSON_OBJECT_T();
{% for put in puts %}
         l_object.put({{ put.key | sql_quote }}, {{ put.expression }});
{% endfor %}
{% for join in joins %}
         IF rec.{{ join.source }} IS NOT NULL THEN
            l_ref := JSON_OBJECT_T();
{% for put in join.puts %}
            l_ref.put({{ put.key | sql_quote }}, {{ put.expression }});
{% endfor %}
            l_object.put({{ join.key | sql_quote }}, l_ref);
         END IF;
{% endfor %}
      END LOOP;

      IF l_object IS NULL THEN
         RAISE_APPLICATION_ERROR(-20002, 'Record not found');
      END IF;
      RETURN l_object;
   END get_record_object;"""

_CREATE_TEMPLATE = """\
   {{ signature }} IS
{% if generated %}
      {{ generated.variable }} {{ table }}.{{ generated.column }}%TYPE;
{% endif %}
   BEGIN
{% if validate_call %}
      {{ validate_call }}

{% endif %}
{% if generated %}
      SELECT NVL(MAX({{ generated.column }}), 0) + 1
        INTO {{ generated.variable }}
        FROM {{ table }};

{% endif %}
      INSERT INTO {{ table }} (
         {{ insert_columns }}
      ) VALUES (
         {{ insert_values }}
      );

      RETURN build_response('success', 201, 'Record created successfully', get_record_object({{ key_args }}));
   EXCEPTION
      WHEN OTHERS THEN
         RETURN handle_all_exceptions;
   END create_record;"""

_EXISTS_CHECK = """\
      SELECT COUNT(*)
        INTO l_count
        FROM {{ table }}
       WHERE {{ key_match }};
      IF l_count = 0 THEN
         RAISE_APPLICATION_ERROR(-20002, 'Record not found');
      END IF;
"""

_UPDATE_TEMPLATE = """\
   {{ signature }} IS
      l_count NUMBER;
   BEGIN
""" + _EXISTS_CHECK + """\

{% if validate_call %}
      {{ validate_call }}

{% endif %}
{% if assignments %}
      UPDATE {{ table }}
         SET {{ assignments }}
       WHERE {{ key_match }};

{% endif %}
      RETURN build_response('success', 200, 'Record updated successfully', get_record_object({{ key_args }}));
   EXCEPTION
      WHEN OTHERS THEN
         RETURN handle_all_exceptions;
   END update_record;"""

_DELETE_TEMPLATE = """\
   {{ signature }} IS
      l_count NUMBER;
      l_data  JSON_OBJECT_T := JSON_OBJECT_T();
   BEGIN
""" + _EXISTS_CHECK + """\

      DELETE FROM {{ table }}
       WHERE {{ key_match }};

{% for key in keys %}
      l_data.put({{ key.label | sql_quote }}, {{ key.param }});
{% endfor %}
      RETURN build_response('success', 200, 'Record deleted successfully', l_data);
   EXCEPTION
      WHEN OTHERS THEN
         RETURN handle_all_exceptions;
   END delete_record;"""

_GET_TEMPLATE = """\
   {{ signature }} IS
   BEGIN
      RETURN build_response('success', 200, 'Record retrieved successfully', get_record_object({{ key_args }}));
   EXCEPTION
      WHEN OTHERS THEN
         RETURN handle_all_exceptions;
   END get_record;"""

_GET_MANY_TEMPLATE = """\
   {{ signature }} IS
      l_page        NUMBER;
      l_page_size   NUMBER;
      l_sort_by     VARCHAR2(4000);
      l_sort_order  VARCHAR2(10);
      l_query       VARCHAR2(4000);
      l_operator    VARCHAR2(10) := 'LIKE';
      l_from_where  VARCHAR2(32767);
      l_offset      NUMBER;
      l_total       NUMBER;
      l_total_pages NUMBER;
      l_cursor      SYS_REFCURSOR;
{% for key in keys %}
      {{ key.variable }} {{ table }}.{{ key.column }}%TYPE;
{% endfor %}
      l_items       JSON_ARRAY_T := JSON_ARRAY_T();
      l_meta        JSON_OBJECT_T := JSON_OBJECT_T();
   BEGIN
      l_page := GREATEST(NVL(TRUNC(p_page), 1), 1);
      l_page_size := LEAST(GREATEST(NVL(TRUNC(p_page_size), {{ page_size }}), 1), {{ max_page_size }});
      l_sort_by := LOWER(TRIM(SUBSTR(NVL(p_sort_by, {{ default_sort | sql_quote }}), 1, 4000)));
      l_sort_order := UPPER(TRIM(SUBSTR(NVL(p_sort_order, {{ sort_order | sql_quote }}), 1, 10)));

      IF l_sort_by IS NULL
         OR l_sort_by NOT IN ({{ sort_columns | map("sql_literal") | join(", ") }}) THEN
         RAISE_APPLICATION_ERROR(-20004, 'Invalid sort column: ' || p_sort_by);
      END IF;
      IF l_sort_order NOT IN ('ASC', 'DESC') THEN
         l_sort_order := 'ASC';
      END IF;

      IF p_query IS NOT NULL THEN
         IF LOWER(p_search_type) = 'exact' THEN
            l_query := UPPER(p_query);
            l_operator := '=';
         ELSE
            l_query := '%' || UPPER(p_query) || '%';
         END IF;
      END IF;

      l_from_where := {{ from_where | sql_quote }};
      l_from_where := REPLACE(l_from_where, '#OP#', l_operator);

      EXECUTE IMMEDIATE 'SELECT COUNT(*)' || l_from_where
         INTO l_total
         USING l_query;
      l_total_pages := CEIL(l_total / l_page_size);
      l_offset := (l_page - 1) * l_page_size;

      OPEN l_cursor FOR
         {{ key_select | sql_quote }} || l_from_where
         || ' ORDER BY t.' || l_sort_by || ' ' || l_sort_order || {{ tie_break | sql_quote }}
         || ' OFFSET :row_offset ROWS FETCH NEXT :row_limit ROWS ONLY'
         USING l_query, l_offset, l_page_size;
      LOOP
         FETCH l_cursor INTO {{ fetch_into }};
         EXIT WHEN l_cursor%NOTFOUND;
         l_items.append(get_record_object({{ fetch_into }}));
      END LOOP;
      CLOSE l_cursor;

      l_meta.put('page', l_page);
      l_meta.put('page_size', l_page_size);
      l_meta.put('total_records', l_total);
      l_meta.put('total_pages', l_total_pages);
      l_meta.put('sort_by', l_sort_by);
      l_meta.put('sort_order', l_sort_order);
      RETURN build_response('success', 200, 'Records retrieved successfully', l_items, l_meta);
   EXCEPTION
      WHEN OTHERS THEN
         IF l_cursor%ISOPEN THEN
            CLOSE l_cursor;
         END IF;
         RETURN handle_all_exceptions;
   END get_records;"""

# SQLCODE -> (HTTP-like status, response message expression)
_ERROR_MAPPINGS = (
    (-1, 409, "'Record already exists'"),
    (-20001, 400, "l_message"),
    (-20002, 404, "l_message"),
    (-20003, 422, "l_message"),
    (-20004, 400, "l_message"),
)


# ============================================================================
# PLAN
# ============================================================================

@dataclass
class CrudJoin:
    """One FK projected into the record object as a nested JSON object."""
    key: str
    source: str
    target: str
    column: str
    alias: str
    puts: List[dict] = field(default_factory=list)
    selects: List[str] = field(default_factory=list)


@dataclass
class CrudPlan:
    """
    Everything the templates need for one table.

    inputs:   parameters of create_record and validate_data, table order
    updates:  non-key inputs (SET list of update_record)
    """
    table: TableDefinition
    package: str
    keys: List[FieldDefinition]
    generated_key: Optional[FieldDefinition]
    inputs: List[FieldDefinition]
    updates: List[FieldDefinition]
    create_audit: List[FieldDefinition]
    update_audit: List[FieldDefinition]
    joins: List[CrudJoin]
    search_columns: List[FieldDefinition]


# ============================================================================
# GENERATOR
# ============================================================================

class CrudGenerator(ScriptGenerator):
    """Generates the CRUD PACKAGES section."""

    SECTION_NAME = "CRUD PACKAGES"
    SECTION_DESCRIPTION = "Create, read, update and delete operations for {table}"

    def __init__(self, renderer: Optional[SqlTemplateRenderer] = None):
        self.renderer = renderer or get_renderer()

    # =========================================================================
    # FIELD CLASSIFICATION
    # =========================================================================

    @staticmethod
    def param(f: FieldDefinition) -> str:
        return f"p_{f.lower_name}"

    @staticmethod
    def is_generated_key(table: TableDefinition) -> bool:
        """A single numeric key without default is generated as MAX + 1."""
        keys = table.primary_keys
        return (
            len(keys) == 1
            and keys[0].type_category == TypeCategory.NUMBER
            and keys[0].default_value is None
        )

    @staticmethod
    def audit_value(f: FieldDefinition) -> str:
        if f.lower_name.endswith("_by"):
            return "USER"
        if f.type_category == TypeCategory.DATE:
            return "SYSDATE"
        return "SYSTIMESTAMP"

    def plan(self, table: TableDefinition, context: GenerationContext) -> CrudPlan:
        """
        Classify fields for the package.

        Args:
            table: Table with at least one primary key field
            context: Generation context (schema used for FK joins)

        Returns:
            CrudPlan
        """
        keys = table.primary_keys
        generated = keys[0] if self.is_generated_key(table) else None

        inputs = []
        updates = []
        for f in table.fields:
            if f.is_primary_key:
                if f is not generated:
                    inputs.append(f)
                continue
            if f.is_system_managed:
                continue
            inputs.append(f)
            updates.append(f)

        create_audit = [
            f for f in table.fields
            if f.is_audit and not f.is_primary_key
            and not f.is_trigger_managed and f.default_value is None
        ]
        update_audit = [
            f for f in table.fields
            if f.is_audit and not f.is_primary_key and not f.is_trigger_managed
            and f.lower_name.startswith(("updated_", "modified_"))
        ]

        return CrudPlan(
            table=table,
            package=ObjectNames.package(table.name),
            keys=keys,
            generated_key=generated,
            inputs=inputs,
            updates=updates,
            create_audit=create_audit,
            update_audit=update_audit,
            joins=self.joins(table, context),
            search_columns=[f for f in table.fields if f.type_category == TypeCategory.TEXT],
        )

    def joins(self, table: TableDefinition, context: GenerationContext) -> List[CrudJoin]:
        """
        FK projections for the record object.

        Displayable columns are the referenced table's non-key, non-audit
        fields. FKs with unresolvable references are skipped.
        """
        schema = context.schema
        valid = [f for f in table.foreign_keys if schema.reference_problem(table, f) is None]
        targets = Counter(f.foreign_key.referenced_table.lower() for f in valid)

        result = []
        for f in valid:
            ref_table, ref_field = schema.find_reference(f)
            display = [c for c in ref_table.fields if not c.is_primary_key and not c.is_audit]
            if not display:
                logger.debug(f"No displayable columns on {ref_table.name} for {table.name}.{f.name}")
                continue

            alias = f"r{len(result) + 1}"
            shared = targets[ref_table.name.lower()] > 1
            join = CrudJoin(
                key=f.lower_name if shared else ref_table.lower_name,
                source=f.upper_name,
                target=ref_table.upper_name,
                column=ref_field.upper_name,
                alias=alias,
            )
            for c in display:
                column_alias = shorten_identifier(
                    f"{alias.upper()}_{c.upper_name}", context.format.max_identifier_length
                )
                join.selects.append(f"{alias}.{c.upper_name} AS {column_alias}")
                join.puts.append({
                    "key": c.lower_name,
                    "expression": self.json_expression(c, f"rec.{column_alias}"),
                })
            result.append(join)
        return result

    @staticmethod
    def json_expression(f: FieldDefinition, reference: str) -> str:
        if f.type_category.is_temporal():
            return f"TO_CHAR({reference}, {LiteralFormatter.quote(JSON_DATE_FORMAT)})"
        return reference

    # =========================================================================
    # TEXT HELPERS
    # =========================================================================

    @staticmethod
    def parameter_list(declarations: List[str]) -> str:
        body = ",\n".join(f"{_PARAM_INDENT}{d}" for d in declarations)
        return f"(\n{body}\n{_CLOSE_INDENT})"

    def signature(self, name: str, declarations: List[str], returns: str = "CLOB") -> str:
        if not declarations:
            return f"FUNCTION {name} RETURN {returns}"
        return f"FUNCTION {name} {self.parameter_list(declarations)} RETURN {returns}"

    def declaration(self, table: TableDefinition, f: FieldDefinition, with_default: bool = False) -> str:
        text = f"{self.param(f)} IN {table.upper_name}.{f.upper_name}%TYPE"
        if with_default and f.default_value is not None:
            text += f" DEFAULT {LiteralFormatter.default_value(f.default_value)}"
        return text

    def key_declarations(self, plan: CrudPlan) -> List[str]:
        return [self.declaration(plan.table, k) for k in plan.keys]

    def key_match(self, plan: CrudPlan, prefix: str = "") -> str:
        return " AND ".join(f"{prefix}{k.upper_name} = {self.param(k)}" for k in plan.keys)

    def key_args(self, plan: CrudPlan) -> str:
        return ", ".join(self.param(k) for k in plan.keys)

    def validate_call(self, plan: CrudPlan) -> Optional[str]:
        if not plan.inputs:
            return None
        args = ",\n".join(f"         {self.param(f)} => {self.param(f)}" for f in plan.inputs)
        return f"validate_data(\n{args}\n      );"

    def get_records_declarations(self, plan: CrudPlan, context: GenerationContext) -> List[str]:
        crud = context.defaults.crud
        default_sort = plan.keys[0].lower_name
        return [
            "p_page        IN NUMBER   DEFAULT 1",
            f"p_page_size   IN NUMBER   DEFAULT {crud.default_page_size}",
            f"p_sort_by     IN VARCHAR2 DEFAULT {LiteralFormatter.quote(default_sort)}",
            f"p_sort_order  IN VARCHAR2 DEFAULT {LiteralFormatter.quote(crud.default_sort_order)}",
            "p_query       IN VARCHAR2 DEFAULT NULL",
            f"p_search_type IN VARCHAR2 DEFAULT {LiteralFormatter.quote(crud.default_search_type)}",
        ]

    # =========================================================================
    # PACKAGE SPECIFICATION
    # =========================================================================

    def signatures(self, plan: CrudPlan, context: GenerationContext) -> List[str]:
        table = plan.table
        keys = self.key_declarations(plan)
        create = [self.declaration(table, f, with_default=True) for f in plan.inputs]
        update = keys + [self.declaration(table, f) for f in plan.updates]
        return [
            self.signature("create_record", create),
            self.signature("update_record", update),
            self.signature("delete_record", keys),
            self.signature("get_record", keys),
            self.signature("get_records", self.get_records_declarations(plan, context)),
        ]

    def package_spec(self, plan: CrudPlan, context: GenerationContext) -> str:
        return self.renderer.render(
            _SPEC_TEMPLATE,
            package=plan.package,
            signatures=self.signatures(plan, context),
        )

    # =========================================================================
    # PACKAGE BODY
    # =========================================================================

    def render_validate(self, plan: CrudPlan, context: GenerationContext) -> Optional[str]:
        if not plan.inputs:
            return None
        table = plan.table
        schema = context.schema

        required, lengths, allowed, references = [], [], [], []
        for f in plan.inputs:
            p = self.param(f)
            if f.is_primary_key or f.nullable is False:
                required.append({"param": p, "message": f"{f.upper_name} is required"})
            if f.max_length is not None:
                lengths.append({
                    "param": p,
                    "limit": f.max_length,
                    "message": f"{f.upper_name} must not exceed {f.max_length} characters",
                })
            if f.has_allowed_values:
                listed = ", ".join(str(v) for v in f.allowed_values)
                allowed.append({
                    "param": p,
                    "values": list(f.allowed_values),
                    "message": f"{f.upper_name} must be one of: {listed}",
                })
            if f.is_foreign_key and schema.reference_problem(table, f) is None:
                ref_table, ref_field = schema.find_reference(f)
                references.append({
                    "param": p,
                    "target": ref_table.upper_name,
                    "column": ref_field.upper_name,
                    "message": f"Referenced {ref_table.upper_name} record not found for {f.upper_name}",
                })

        parameters = self.parameter_list([self.declaration(table, f) for f in plan.inputs])
        return self.renderer.render(
            _VALIDATE_TEMPLATE,
            parameters=parameters,
            required=required,
            lengths=lengths,
            allowed=allowed,
            references=references,
        )

    def render_record_object(self, plan: CrudPlan) -> str:
        table = plan.table
        selects = [f"t.{f.upper_name}" for f in table.fields]
        for join in plan.joins:
            selects.extend(join.selects)
        puts = [
            {"key": f.lower_name, "expression": self.json_expression(f, f"rec.{f.upper_name}")}
            for f in table.fields
        ]
        return self.renderer.render(
            _RECORD_OBJECT_TEMPLATE,
            parameters=self.parameter_list(self.key_declarations(plan)),
            select_list=",\n                ".join(selects),
            table=table.upper_name,
            joins=plan.joins,
            key_match=self.key_match(plan, prefix="t."),
            puts=puts,
        )

    def render_create(self, plan: CrudPlan, context: GenerationContext) -> str:
        table = plan.table
        generated = None
        if plan.generated_key is not None:
            generated = {
                "variable": f"l_{plan.generated_key.lower_name}",
                "column": plan.generated_key.upper_name,
            }

        columns, values = [], []
        for f in table.fields:
            if generated and f is plan.generated_key:
                columns.append(f.upper_name)
                values.append(generated["variable"])
            elif f in plan.inputs:
                columns.append(f.upper_name)
                values.append(self.param(f))
            elif f in plan.create_audit:
                columns.append(f.upper_name)
                values.append(self.audit_value(f))

        key_args = ", ".join(
            generated["variable"] if generated and k is plan.generated_key else self.param(k)
            for k in plan.keys
        )
        signature = self.signatures(plan, context)[0]
        return self.renderer.render(
            _CREATE_TEMPLATE,
            signature=signature,
            table=table.upper_name,
            generated=generated,
            validate_call=self.validate_call(plan),
            insert_columns=",\n         ".join(columns),
            insert_values=",\n         ".join(values),
            key_args=key_args,
        )

    def render_update(self, plan: CrudPlan, context: GenerationContext) -> str:
        assignments = [f"{f.upper_name} = {self.param(f)}" for f in plan.updates]
        assignments.extend(f"{f.upper_name} = {self.audit_value(f)}" for f in plan.update_audit)
        return self.renderer.render(
            _UPDATE_TEMPLATE,
            signature=self.signatures(plan, context)[1],
            table=plan.table.upper_name,
            key_match=self.key_match(plan),
            validate_call=self.validate_call(plan),
            assignments=",\n             ".join(assignments),
            key_args=self.key_args(plan),
        )

    def render_delete(self, plan: CrudPlan, context: GenerationContext) -> str:
        return self.renderer.render(
            _DELETE_TEMPLATE,
            signature=self.signatures(plan, context)[2],
            table=plan.table.upper_name,
            key_match=self.key_match(plan),
            keys=[{"label": k.lower_name, "param": self.param(k)} for k in plan.keys],
        )

    def render_get(self, plan: CrudPlan, context: GenerationContext) -> str:
        return self.renderer.render(
            _GET_TEMPLATE,
            signature=self.signatures(plan, context)[3],
            key_args=self.key_args(plan),
        )

    def from_where(self, plan: CrudPlan) -> str:
        """
        Shared FROM/WHERE text for the count and page queries.

        The search value is bound once through a one-row inline view;
        #OP# is replaced with LIKE or = at run time.
        """
        text = f" FROM {plan.table.upper_name} t CROSS JOIN (SELECT :q AS q FROM dual) s"
        if not plan.search_columns:
            return text + " WHERE 1 = 1"
        matches = " OR ".join(f"UPPER(t.{f.upper_name}) #OP# s.q" for f in plan.search_columns)
        return text + f" WHERE (s.q IS NULL OR {matches})"

    def render_get_many(self, plan: CrudPlan, context: GenerationContext) -> str:
        crud = context.defaults.crud
        table = plan.table
        keys = [{"variable": f"r_{k.lower_name}", "column": k.upper_name} for k in plan.keys]
        return self.renderer.render(
            _GET_MANY_TEMPLATE,
            signature=self.signatures(plan, context)[4],
            table=table.upper_name,
            sort_columns=[f.lower_name for f in table.fields],
            page_size=crud.default_page_size,
            max_page_size=crud.max_page_size,
            default_sort=plan.keys[0].lower_name,
            sort_order=crud.default_sort_order,
            keys=keys,
            from_where=self.from_where(plan),
            key_select="SELECT " + ", ".join(f"t.{k.upper_name}" for k in plan.keys),
            tie_break=", " + ", ".join(f"t.{k.upper_name}" for k in plan.keys),
            fetch_into=", ".join(k["variable"] for k in keys),
        )

    def package_body(self, plan: CrudPlan, context: GenerationContext) -> str:
        units = [
            self.renderer.render(_BUILD_RESPONSE_TEMPLATE),
            self.renderer.render(_EXCEPTIONS_TEMPLATE, mappings=_ERROR_MAPPINGS),
            self.render_validate(plan, context),
            self.render_record_object(plan),
            self.render_create(plan, context),
            self.render_update(plan, context),
            self.render_delete(plan, context),
            self.render_get(plan, context),
            self.render_get_many(plan, context),
        ]
        return self.renderer.render(
            _BODY_TEMPLATE,
            package=plan.package,
            units=[u for u in units if u],
        )

    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        if not table.has_primary_key:
            logger.debug(f"No primary key on {table.name}; CRUD package skipped")
            return None
        plan = self.plan(table, context)
        return f"{self.package_spec(plan, context)}\n\n{self.package_body(plan, context)}"


__all__ = [
    "JSON_DATE_FORMAT",
    "CrudJoin",
    "CrudPlan",
    "CrudGenerator",
]
