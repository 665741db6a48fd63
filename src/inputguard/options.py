"""Resolution of caller-supplied option records."""

from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

OptionsT = TypeVar("OptionsT", bound=BaseModel)


def resolve_options(
    options: Union[OptionsT, Mapping[str, Any], None],
    model: Type[OptionsT],
) -> OptionsT:
    """
    Turn None, a mapping, or an options model into an options model.

    Omitted fields always resolve to the model defaults.

    Raises:
        pydantic.ValidationError: If a mapping holds invalid values
        TypeError: If options is some other type
    """
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    if isinstance(options, Mapping):
        return model(**options)
    raise TypeError(
        f"options must be {model.__name__}, a mapping or None, got {type(options).__name__}"
    )
