"""Test module for xml_element_builder package initialization."""


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import xml_element_builder

    assert xml_element_builder.__version__ == "0.1.0"


def test_package_all_exports() -> None:
    """Test that every name in __all__ is importable from the package."""
    import xml_element_builder

    for name in xml_element_builder.__all__:
        assert hasattr(xml_element_builder, name)


def test_level_one_api() -> None:
    """Test the simple API builds a tree."""
    from xml_element_builder import parse_element

    root = parse_element('<a xmlns="urn:a"><b/></a>')

    assert root.get_child("b", "urn:a").default_namespace == "urn:a"
