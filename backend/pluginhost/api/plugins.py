from __future__ import annotations
from fastapi import APIRouter, HTTPException
from typing import Iterable
import logging

from pluginhost.core.dependencies import PluginManagerDep
from pluginhost.core.exceptions import EventPublishError, RegistryStateError
from pluginhost.models.plugin import Plugin
from pluginhost.schemas.plugin import PluginListResponse, PluginModel, ReloadResponse

router = APIRouter(prefix='/plugins', tags=['plugins'])
logger = logging.getLogger(__name__)


def _to_list_response(plugins: Iterable[Plugin]) -> PluginListResponse:
    models = [PluginModel(**p.to_dict()) for p in plugins]
    return PluginListResponse(plugins=models, count=len(models))


@router.get('', response_model=PluginListResponse)
def list_plugins(manager: PluginManagerDep):
    """List every plugin; a plugin bound to several views is listed once per view."""
    try:
        return _to_list_response(manager.get_plugins())
    except RegistryStateError as exc:
        raise HTTPException(status_code=409, detail={'code': 'REGISTRY_STATE', 'message': str(exc)})


@router.get('/views/{view_name}', response_model=PluginListResponse)
def list_view_plugins(view_name: str, manager: PluginManagerDep):
    try:
        plugins = sorted(manager.get_view_plugins(view_name), key=lambda p: p.id or '')
    except RegistryStateError as exc:
        raise HTTPException(status_code=409, detail={'code': 'REGISTRY_STATE', 'message': str(exc)})
    return _to_list_response(plugins)


@router.post('/reload', response_model=ReloadResponse)
def reload_plugins(manager: PluginManagerDep):
    try:
        loaded = manager.load()
    except EventPublishError as exc:
        logger.exception("plugin reload failed")
        raise HTTPException(status_code=500, detail={'code': 'PLUGIN_LOAD_FAILED', 'message': str(exc.__cause__ or exc)})
    return ReloadResponse(loaded=[p.id for p in loaded], count=len(loaded))


@router.post('/{plugin_id}/status', response_model=PluginModel)
def toggle_plugin_status(plugin_id: str, manager: PluginManagerDep):
    """Flip a plugin between enabled and disabled."""
    try:
        plugin = manager.find_plugin(plugin_id)
        if plugin is None:
            raise HTTPException(status_code=404, detail={'code': 'PLUGIN_NOT_FOUND', 'plugin': plugin_id})
        manager.update(plugin)
    except RegistryStateError as exc:
        raise HTTPException(status_code=409, detail={'code': 'REGISTRY_STATE', 'plugin': plugin_id, 'message': str(exc)})
    return PluginModel(**plugin.to_dict())
