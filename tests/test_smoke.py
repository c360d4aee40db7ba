"""
Smoke tests：驗證套件可匯入、版本與公開 API 存在。
"""


def test_import_package():
    """套件可正常匯入"""
    import figdroid
    assert figdroid.__version__ == "0.1.0"


def test_public_api():
    """公開 API 可從 figdroid 取得"""
    from figdroid import (
        normalize,
        generate_xml,
        generate_view_code,
        convert_document,
        write_outputs,
        load_config,
        sample_document,
        InvalidDocument,
        JAVA,
        KOTLIN,
    )
    assert callable(normalize)
    assert callable(generate_xml)
    assert callable(generate_view_code)
    assert callable(convert_document)
    assert callable(write_outputs)
    assert callable(load_config)
    assert JAVA.name == "java"
    assert KOTLIN.name == "kotlin"
    assert issubclass(InvalidDocument, ValueError)


def test_end_to_end_minimal():
    """最小合法文件 → 三份輸出"""
    from figdroid import convert_document

    minimal = {
        "document": {
            "id": "0:0",
            "type": "DOCUMENT",
            "children": [{
                "id": "1:1",
                "name": "Screen",
                "type": "FRAME",
                "absoluteBoundingBox": {"x": 0, "y": 0, "width": 100, "height": 100},
            }],
        }
    }
    result = convert_document(minimal)
    assert "<FrameLayout" in result.xml
    assert "private FrameLayout screen;" in result.java
    assert "private lateinit var screen: FrameLayout" in result.kotlin
