"""Tests for the regex JDL scanner."""
from protogen.generators.jdl.parser import parse_jdl, validate_jdl

BLOG_JDL = """
entity Author {
  name String required,
  email String
}

entity Post {
  title String required minlength(3),
  views Integer
}

relationship OneToMany {
  Author{posts} to Post{author(name)}
}

relationship ManyToOne {
  Post{editor} to Editor
}
"""


def test_parse_jdl_extracts_entities_and_fields():
    entities = parse_jdl(BLOG_JDL)

    assert [e.name for e in entities] == ["Author", "Post"]
    author = entities[0]
    assert [f.name for f in author.fields] == ["name", "email"]
    assert author.fields[0].type == "String"
    assert author.fields[0].is_required is True
    assert author.fields[1].is_required is False

    post = entities[1]
    assert post.fields[0].validations == "required minlength(3)"
    assert post.fields[1].type == "Integer"


def test_parse_jdl_links_known_relationships_only():
    author, post = parse_jdl(BLOG_JDL)

    assert len(author.relationships) == 1
    rel = author.relationships[0]
    assert rel.type == "OneToMany"
    assert rel.with_entity == "Post"
    assert rel.field == "posts"
    assert rel.is_source is True

    # Editor is unknown, so the ManyToOne block is dropped
    assert len(post.relationships) == 1
    assert post.relationships[0].field == "author"
    assert post.relationships[0].is_source is False


def test_entity_to_dict_omits_empty_relationships():
    entities = parse_jdl("entity Tag {\n  label String\n}")
    assert entities[0].to_dict() == {
        "name": "Tag",
        "fields": [{"name": "label", "type": "String", "validations": "", "isRequired": False}],
    }


def test_parse_jdl_ignores_unknown_syntax():
    assert parse_jdl("") == []
    assert parse_jdl("application { config { baseName blog } }") == []


def test_validate_jdl_accepts_traditional_form():
    result = validate_jdl(BLOG_JDL)
    assert result.is_valid is True
    assert result.to_dict() == {"isValid": True, "errors": []}


def test_validate_jdl_reports_missing_entities_and_bad_relationships():
    result = validate_jdl("relationship between things")
    assert result.is_valid is False
    assert result.errors == [
        "No entity definitions found in JDL",
        "Invalid relationship syntax in JDL",
    ]
