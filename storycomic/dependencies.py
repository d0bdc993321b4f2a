# storycomic/dependencies.py
from typing import Annotated, Any, Dict

from fastapi import Depends

from storycomic.config.settings import Settings
from storycomic.workflows.comic_workflow import ComicWorkflow

_shared_state: Dict[str, Any] = {}


def _get_shared_object(key: str) -> Any:
    obj = _shared_state.get(key)
    if obj is None:
        raise RuntimeError(f"Shared object '{key}' not found in _shared_state. Check lifespan setup and key names.")
    return obj


def get_settings() -> Settings:
    return _get_shared_object('settings')


def get_comic_workflow() -> ComicWorkflow:
    return _get_shared_object('comic_workflow')


SettingsDep = Annotated[Settings, Depends(get_settings)]
ComicWorkflowDep = Annotated[ComicWorkflow, Depends(get_comic_workflow)]
