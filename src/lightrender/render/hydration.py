"""Hydration compiler: turns a RenderContext into a client script.

Static pages pay nothing: with no states, computed sources, bindings or
events the compiler returns an empty string and no ``<script>`` is emitted.

Client Layout:
    ```
    window.__lr = {state, watch}   private namespace (window.state aliases state)
    state                          Proxy over a plain map; assignment notifies watchers
    init()                         runs once the document is parsed
      1. states    raw[id] = value; element gets value/textContent + sync watcher
      2. computed  el.textContent = (fn)(state), errors logged not thrown
      3. bindings  watch(key, update) + one immediate update when key exists
      4. events    el.addEventListener(name, fn), __STATE_ID__ already substituted
    ```

The ordering guarantees a computed source or binding never reads a state
that has not been assigned yet. Every id, event name and state value is
embedded as script-safe JSON; function sources are embedded verbatim
after passing validation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lightrender.runtime.exceptions import ClientSourceError
from lightrender.runtime.metrics import HYDRATION_REJECTED
from lightrender.utils.constants import CLIENT_NAMESPACE, STATE_ID_PLACEHOLDER, VALUE_TAGS
from lightrender.utils.html import escape_json_for_script

if TYPE_CHECKING:
    from lightrender.render_context import RenderContext
    from lightrender.runtime.core import Runtime

logger = logging.getLogger(__name__)

_PRELUDE = (
    '(function(){"use strict";'
    "var raw={},watchers={};"
    "function watch(k,f){(watchers[k]||(watchers[k]=[])).push(f);}"
    "var state=new Proxy(raw,{set:function(t,k,v){t[k]=v;var l=watchers[k];"
    "if(l){for(var i=0;i<l.length;i++){try{l[i](v);}"
    'catch(e){console.error("[lightrender] watcher failed",k,e);}}}return true;}});'
    f"window.{CLIENT_NAMESPACE}={{state:state,watch:watch}};window.state=state;"
    "function byId(id){return document.getElementById(id);}"
    "function init(){"
)

_EPILOGUE = (
    "}"
    'if(document.readyState==="loading"){'
    'document.addEventListener("DOMContentLoaded",init);}else{init();}'
    "})();"
)


def _js(value: object) -> str:
    return escape_json_for_script(value, default=str)


def hydration_property(tag: str) -> str:
    """DOM property a state value is written to for ``tag``."""
    return "value" if tag in VALUE_TAGS else "textContent"


def compile_client(ctx: RenderContext, runtime: Runtime) -> str:
    """Compile the hydration script for a finished render.

    Args:
        ctx: Populated render context
        runtime: Supplies validation limits, mode and metrics

    Returns:
        Script body (without ``<script>`` tags), or "" when nothing hydrates
    """
    if not ctx.needs_hydration:
        return ""

    parts: list[str] = [_PRELUDE]

    # 1. States: assign every value before wiring any element
    for entry in ctx.states:
        parts.append(f"raw[{_js(entry.id)}]={_js(entry.value)};")
    for entry in ctx.states:
        node_id = _js(entry.id)
        prop = hydration_property(entry.tag)
        parts.append(
            f"(function(){{var el=byId({node_id});if(!el)return;"
            f"el.{prop}=raw[{node_id}];"
            f"watch({node_id},function(v){{el.{prop}=v;}});}})();"
        )

    # 2. Computed values
    for entry in ctx.computed:
        node_id = _js(entry.id)
        parts.append(
            f"(function(){{var el=byId({node_id});if(!el)return;"
            f"try{{el.textContent=({entry.source})(state);}}"
            f'catch(e){{console.error("[lightrender] computed failed",{node_id},e);}}}})();'
        )

    # 3. Reactive bindings
    for entry in ctx.state_bindings:
        node_id = _js(entry.id)
        key = _js(entry.state_key)
        parts.append(
            f"(function(){{var el=byId({node_id});if(!el)return;var f=({entry.source});"
            f"function u(v){{try{{el.textContent=f(v);}}"
            f'catch(e){{console.error("[lightrender] binding failed",{node_id},e);}}}}'
            f"watch({key},u);"
            f"if(Object.prototype.hasOwnProperty.call(raw,{key}))u(raw[{key}]);}})();"
        )

    # 4. Event listeners
    for binding in ctx.events:
        fn = binding.fn
        if binding.target_id:
            fn = fn.substitute({STATE_ID_PLACEHOLDER: binding.target_id})
        try:
            fn.validate(runtime.config)
        except ClientSourceError as exc:
            runtime.metrics.increment(HYDRATION_REJECTED)
            if not runtime.config.is_production:
                logger.warning(
                    "Skipping %s listener for #%s: %s", binding.event, binding.node_id, exc
                )
            continue
        parts.append(
            f"(function(){{var el=byId({_js(binding.node_id)});"
            f"if(el)el.addEventListener({_js(binding.event)},({fn.source}));}})();"
        )

    parts.append(_EPILOGUE)
    return "".join(parts)
