from azure_rm_cmdlets.output_classes import Dimension, DimensionCollection


def test_each_line_is_indented():
    collection = DimensionCollection(
        [
            Dimension(Name="ApiName", LocalizedName="API name", Values=["GetBlob", "PutBlob"]),
            Dimension(Name="ResponseType"),
        ]
    )

    lines = str(collection).splitlines()

    assert len(lines) == 3
    assert all(line.startswith("\t") for line in lines)
    assert "Name" in lines[0]
    assert "API name" in lines[1]
    assert "GetBlob, PutBlob" in lines[1]
    assert "ResponseType" in lines[2]


def test_indentation_depth():
    collection = DimensionCollection([Dimension(Name="ApiName")], indentation_tabs=2)

    assert all(line.startswith("\t\t") for line in str(collection).splitlines())


def test_empty_collection_renders_empty():
    assert str(DimensionCollection()) == ""
    assert len(DimensionCollection([])) == 0


def test_display_name_falls_back_to_name():
    assert Dimension(Name="GeoType").display_name == "GeoType"
    assert Dimension(Name="GeoType", LocalizedName="Geo type").display_name == "Geo type"


def test_names_and_iteration():
    dims = [Dimension(Name="A"), Dimension(Name="B")]
    collection = DimensionCollection(dims)

    assert collection.names() == ["A", "B"]
    assert list(collection) == dims
