"""Drive a FlashStore through request cycles from short text scripts.

One script describes one cycle as ``;``-separated operations:

    set:notice=Created        store['notice'] = 'Created'
    now:alert=Oops            store.now['alert'] = 'Oops'
    update:a=1,b=2            store.update({'a': '1', 'b': '2'})
    replace:a=1               store.replace({'a': '1'})
    keep / keep:notice        store.keep() / store.keep('notice')
    discard / discard:notice  store.discard() / store.discard('notice')
    del:notice                del store['notice']

An empty script is a request that does not touch the flash.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flashstate.services.flash_store import FlashStore, KeyState


class CycleScriptError(ValueError):
    """Raised for an operation the script language does not know"""


@dataclass
class CycleResult:
    """What one cycle saw and left behind"""
    index: int
    visible: Dict[str, Any]
    states: Dict[str, KeyState] = field(default_factory=dict)


def _parse_pairs(text: str, op: str) -> Dict[str, str]:
    pairs = {}
    for item in filter(None, (part.strip() for part in text.split(','))):
        key, sep, value = item.partition('=')
        if not sep or not key.strip():
            raise CycleScriptError(f"'{op}' expects key=value pairs, got '{item}'")
        pairs[key.strip()] = value.strip()
    return pairs


def apply_operation(store: FlashStore, operation: str):
    """Apply a single script operation to ``store``"""
    op, _, arg = operation.strip().partition(':')
    op = op.strip().lower()
    arg = arg.strip()
    key: Optional[str] = arg or None

    if op == 'set':
        for k, v in _parse_pairs(arg, op).items():
            store[k] = v
    elif op == 'now':
        for k, v in _parse_pairs(arg, op).items():
            store.now[k] = v
    elif op == 'update':
        store.update(_parse_pairs(arg, op))
    elif op == 'replace':
        store.replace(_parse_pairs(arg, op))
    elif op == 'keep':
        store.keep(key)
    elif op == 'discard':
        store.discard(key)
    elif op == 'del':
        if key is None:
            raise CycleScriptError("'del' needs a key")
        del store[key]
    else:
        raise CycleScriptError(f"Unknown flash operation '{op}'")


def run_cycles(scripts: List[str], store: Optional[FlashStore] = None) -> List[CycleResult]:
    """Run each script as one request cycle.

    Between cycles the store goes through its session form, exactly as it does
    between two real requests.
    """
    persisted = store.to_session() if store is not None else None
    results = []
    for index, script in enumerate(scripts, 1):
        current = FlashStore.from_session(persisted)
        result = CycleResult(index=index, visible=current.to_dict())
        for operation in filter(None, (part.strip() for part in script.split(';'))):
            apply_operation(current, operation)
        current.sweep()
        result.states = {key: current.state(key) for key in current}
        persisted = current.to_session()
        results.append(result)
    return results
