from apiboost.config import GeneratorConfig
from apiboost.generator.unit import SourceUnit, assemble_unit, render_function, render_method
from apiboost.parser.base import (
    FieldDescriptor,
    Operation,
    OperationParameters,
    RequestBody,
    ResponseDescriptor,
)


def _get_article() -> Operation:
    return Operation(
        path="/article/{article_id}",
        method="get",
        summary="Get article",
        suggested_name="reqGetArticle",
        parameters=OperationParameters(
            path=[FieldDescriptor(name="article_id", kind="string", required=True, description="Article id")],
        ),
    )


def _list_articles() -> Operation:
    return Operation(
        path="/article/list",
        method="get",
        summary="List articles",
        suggested_name="reqGetArticleList",
        requires_auth=True,
        parameters=OperationParameters(
            query=[
                FieldDescriptor(name="currentPage", kind="number", required=True, description="Current page"),
                FieldDescriptor(name="status", kind="number", description="Status(1:pending 2:done)"),
            ],
        ),
        response=ResponseDescriptor(items=[
            FieldDescriptor(name="code", kind="number"),
            FieldDescriptor(name="msg", kind="string"),
        ]),
    )


def _update_article() -> Operation:
    return Operation(
        path="/article/{id}",
        method="put",
        suggested_name="reqPutArticle",
        parameters=OperationParameters(
            query=[FieldDescriptor(name="notify", kind="boolean")],
            path=[FieldDescriptor(name="id", kind="number", required=True)],
            body=RequestBody(items=[FieldDescriptor(name="title", kind="string", required=True)]),
        ),
    )


class TestAssembleUnit:
    def test_path_only_operation(self):
        unit = assemble_unit("article", _get_article(), GeneratorConfig(), set())
        assert unit.name == "reqGetArticle"
        assert unit.payload == ("url: `/article/${pathParams.article_id}`", 'method: "get"')
        assert [binding for binding, _ in unit.params] == ["pathParams"]
        assert unit.return_type == "any"
        assert unit.call == "request"

    def test_query_operation_payload_and_binding(self):
        unit = assemble_unit("article", _list_articles(), GeneratorConfig(), set())
        assert unit.payload == ('url: "/article/list"', 'method: "get"', "params")
        assert unit.params[0][0] == "params"
        assert "status?: 1 | 2;" in unit.params[0][1]

    def test_all_groups_in_order(self):
        unit = assemble_unit("article", _update_article(), GeneratorConfig(), set())
        assert [binding for binding, _ in unit.params] == ["params", "pathParams", "data"]
        assert unit.payload == (
            "url: `/article/${pathParams.id}`",
            'method: "put"',
            "params",
            "data",
        )

    def test_url_binding_falls_back_to_query_then_body(self):
        op = Operation(
            path="/file",
            method="post",
            suggested_name="reqPostFile",
            parameters=OperationParameters(body=RequestBody(items=[FieldDescriptor(name="name", kind="string")])),
        )
        unit = assemble_unit("file", op, GeneratorConfig(base_url_prefix="/api"), set())
        assert unit.payload[0] == 'url: "/api/file"'

    def test_no_parameters(self):
        op = Operation(path="/user/logout", method="post", suggested_name="reqPostUserLogout")
        unit = assemble_unit("user", op, GeneratorConfig(), set())
        assert unit.params == ()
        assert unit.payload == ('url: "/user/logout"', 'method: "post"')

    def test_doc_lines(self):
        unit = assemble_unit("article", _list_articles(), GeneratorConfig(), set())
        assert unit.doc == (
            "List articles (auth required)",
            "@group article",
            "@route /article/list [GET]",
            "@param {number} params.currentPage Current page",
            "@param {1 | 2} params.status Status(1:pending 2:done)",
        )

    def test_doc_disabled(self):
        unit = assemble_unit("article", _list_articles(), GeneratorConfig(include_jsdoc=False), set())
        assert unit.doc == ()

    def test_unannotated_variant(self):
        unit = assemble_unit("article", _update_article(), GeneratorConfig(output_ext="js"), set())
        assert unit.params == (("params", None), ("pathParams", None), ("data", None))
        assert unit.return_type is None

    def test_custom_identifier(self):
        cfg = GeneratorConfig.model_validate({"requestImport": {"identifier": "http"}})
        unit = assemble_unit("article", _get_article(), cfg, set())
        assert unit.call == "http"

    def test_used_names_updated(self):
        used: set[str] = set()
        first = assemble_unit("article", _get_article(), GeneratorConfig(), used)
        second = assemble_unit("article", _get_article(), GeneratorConfig(), used)
        assert first.name == "reqGetArticle"
        assert second.name == "reqGetArticle_get_article_article_id"
        assert used == {first.name, second.name}

    def test_deterministic(self):
        a = assemble_unit("article", _update_article(), GeneratorConfig(), set())
        b = assemble_unit("article", _update_article(), GeneratorConfig(), set())
        assert a == b


class TestRender:
    def test_render_function(self):
        unit = assemble_unit("article", _get_article(), GeneratorConfig(), set())
        assert render_function(unit) == "\n".join([
            "/**",
            " * Get article",
            " * @group article",
            " * @route /article/{article_id} [GET]",
            " * @param {string} pathParams.article_id Article id",
            " */",
            "export function reqGetArticle(pathParams: {",
            "  /** Article id */",
            "  article_id: string;",
            "}): Promise<any> {",
            "  return request({",
            "    url: `/article/${pathParams.article_id}`,",
            '    method: "get",',
            "  });",
            "}",
            "",
        ])

    def test_render_method(self):
        unit = assemble_unit("article", _get_article(), GeneratorConfig(include_jsdoc=False), set())
        assert render_method(unit) == "\n".join([
            "  reqGetArticle(pathParams: {",
            "    /** Article id */",
            "    article_id: string;",
            "  }) {",
            "    return request({",
            "      url: `/article/${pathParams.article_id}`,",
            '      method: "get",',
            "    });",
            "  },",
        ])

    def test_render_unannotated_function(self):
        unit = assemble_unit("article", _update_article(), GeneratorConfig(output_ext="js", include_jsdoc=False), set())
        assert render_function(unit).splitlines()[0] == "export function reqPutArticle(params, pathParams, data) {"

    def test_empty_summary_line(self):
        unit = SourceUnit(name="f", doc=("", "@group g"), call="request")
        assert render_function(unit).splitlines()[:3] == ["/**", " *", " * @group g"]
