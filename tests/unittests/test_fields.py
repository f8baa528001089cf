import pytest
from pydantic import ValidationError
from pointy_studio.fields import DataType, PipelineField


class TestPipelineField:
    def test_init_basic(self):
        field = PipelineField(name="url")
        assert field.name == "url"
        assert field.required is False
        assert field.data_type is DataType.STRING
        assert field.default is None
        assert field.batch_processor is None
        assert field.batch_size is None

    def test_data_type_from_string(self):
        field = PipelineField(name="rows", data_type="array")
        assert field.data_type is DataType.ARRAY

    def test_invalid_data_type(self):
        with pytest.raises(ValidationError):
            PipelineField(name="rows", data_type="tuple")

    @pytest.mark.parametrize("batch_size", [0, -3])
    def test_batch_size_must_be_positive(self, batch_size):
        with pytest.raises(ValidationError):
            PipelineField(name="rows", batch_processor=True, batch_size=batch_size)

    def test_accessor(self):
        assert PipelineField(name="url").accessor == "data['url']"

    def test_describe(self):
        assert PipelineField(name="a").describe() == "(string)"
        assert (
            PipelineField(name="a", data_type="number", required=True).describe()
            == "(number, required)"
        )
        field = PipelineField(
            name="a", data_type="array", batch_processor=True, batch_size=10
        )
        assert field.has_batch_operation is True
        assert field.describe() == "(array, batch[10])"

    def test_batch_size_without_batch_processor(self):
        field = PipelineField(name="a", batch_processor=False, batch_size=5)
        assert field.has_batch_operation is False
        assert field.describe() == "(string)"

    def test_dump_uses_plain_values(self):
        field = PipelineField(name="a", data_type=DataType.OBJECT, default={"k": 1})
        assert field.model_dump(mode="json") == {
            "name": "a",
            "required": False,
            "data_type": "object",
            "default": {"k": 1},
            "batch_processor": None,
            "batch_size": None,
        }
