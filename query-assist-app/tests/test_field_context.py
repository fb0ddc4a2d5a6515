from __future__ import annotations

from backend.services.field_context import generate_field_context

MAPPINGS = {
    "logs": {
        "mappings": {
            "properties": {
                "timestamp": {"type": "date"},
                "message": {"type": "text", "fields": {"keyword": {"type": "keyword", "ignore_above": 256}}},
                "host": {"properties": {"name": {"type": "keyword"}, "ip": {"type": "ip"}}},
                "hostname": {"type": "alias", "path": "host.name"},
                "status": {"type": "integer"},
            }
        }
    }
}

SAMPLE = {
    "hits": {
        "total": {"value": 1, "relation": "eq"},
        "hits": [
            {
                "_index": "logs",
                "_source": {
                    "timestamp": "2024-01-01T00:00:00Z",
                    "message": "GET /index.html",
                    "host": {"name": "web-1"},
                    "status": 200,
                },
            }
        ],
    }
}


def test_field_context_lists_fields_with_sample_values():
    context = generate_field_context(MAPPINGS, SAMPLE)
    assert context.split("\n") == [
        '- timestamp: date ("2024-01-01T00:00:00Z")',
        '- message: text ("GET /index.html")',
        '- host.name: keyword ("web-1")',
        "- host.ip: ip ()",
        "- status: integer (200)",
    ]


def test_field_context_skips_alias_and_multi_fields():
    context = generate_field_context(MAPPINGS, SAMPLE)
    assert "hostname" not in context
    assert "message.keyword" not in context


def test_field_context_without_sample_document():
    context = generate_field_context(MAPPINGS, {"hits": {"hits": []}})
    assert "- status: integer ()" in context


def test_field_context_keeps_objects_named_like_mapping_keywords():
    mappings = {"idx": {"mappings": {"properties": {"fields": {"properties": {"type": {"type": "keyword"}}}}}}}
    sample = {"hits": {"hits": [{"_source": {"fields": {"type": "a"}}}]}}
    assert generate_field_context(mappings, sample) == '- fields.type: keyword ("a")'


def test_field_context_merges_indices_first_type_wins():
    mappings = {
        "logs-a": {"mappings": {"properties": {"f": {"type": "keyword"}}}},
        "logs-b": {"mappings": {"properties": {"f": {"type": "text"}, "g": {"type": "long"}}}},
    }
    assert generate_field_context(mappings, {"hits": {"hits": []}}) == "- f: keyword ()\n- g: long ()"
