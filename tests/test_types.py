from apiboost.generator.types import doc_type, fields_shape, infer_type, number_union
from apiboost.parser.base import FieldDescriptor


def _field(**kwargs) -> FieldDescriptor:
    kwargs.setdefault("name", "f")
    return FieldDescriptor(**kwargs)


class TestNumberUnion:
    def test_extracts_sorted_unique_values(self):
        f = _field(kind="number", description="status(3:rejected 1:pending 2:done 1:again)")
        assert number_union(f) == "1 | 2 | 3"

    def test_two_values_make_a_union(self):
        f = _field(kind="number", description="status(1:pending 2:done)")
        assert infer_type(f) == "1 | 2"

    def test_single_value_falls_back_to_number(self):
        f = _field(kind="number", description="only 1: mention")
        assert number_union(f) is None
        assert infer_type(f) == "number"

    def test_space_before_colon(self):
        f = _field(kind="number", description="0 : off, 1 : on")
        assert infer_type(f) == "0 | 1"

    def test_digits_next_to_cjk_text(self):
        assert infer_type(_field(kind="number", description="状态1:审核中 2:通过")) == "1 | 2"
        assert infer_type(_field(kind="number", description="文章状态:1:审核中2:通过3:未通过")) == "1 | 2 | 3"

    def test_only_number_fields(self):
        f = _field(kind="string", description="1:a 2:b")
        assert number_union(f) is None
        assert infer_type(f) == "string"


class TestInferType:
    def test_missing_field_is_any(self):
        assert infer_type(None) == "any"

    def test_primitives(self):
        assert infer_type(_field(kind="string")) == "string"
        assert infer_type(_field(kind="number")) == "number"
        assert infer_type(_field(kind="boolean")) == "boolean"
        assert infer_type(_field(kind="object")) == "object"

    def test_unset_or_unknown_kind_is_any(self):
        assert infer_type(_field()) == "any"
        assert infer_type(_field(kind="integer")) == "any"

    def test_array_of_field_list_uses_first_entry(self):
        f = _field(kind="array", items=[_field(kind="string"), _field(kind="number")])
        assert infer_type(f) == "string[]"

    def test_array_of_single_descriptor(self):
        f = _field(kind="array", items=FieldDescriptor(kind="number"))
        assert infer_type(f) == "number[]"

    def test_array_without_items(self):
        assert infer_type(_field(kind="array")) == "any[]"
        assert infer_type(_field(kind="array", items=[])) == "any[]"

    def test_nested_arrays(self):
        inner = FieldDescriptor(kind="array", items=FieldDescriptor(kind="boolean"))
        assert infer_type(_field(kind="array", items=inner)) == "boolean[][]"


class TestDocType:
    def test_same_as_inferred_type(self):
        f = _field(kind="array", items=[_field(kind="string")])
        assert doc_type(f) == "string[]"

    def test_angle_brackets_replaced(self, monkeypatch):
        monkeypatch.setattr("apiboost.generator.types.infer_type", lambda field: "Array<string>")
        assert doc_type(_field(kind="array")) == "Array(string)"


class TestFieldsShape:
    def test_empty(self):
        assert fields_shape([]) == "{}"
        assert fields_shape(None) == "{}"

    def test_required_and_optional_fields(self):
        shape = fields_shape([
            _field(name="id", kind="number", required=True, description="Id"),
            _field(name="q", kind="string"),
        ])
        assert shape == "\n".join([
            "{",
            "  /** Id */",
            "  id: number;",
            "  /**  */",
            "  q?: string;",
            "}",
        ])
