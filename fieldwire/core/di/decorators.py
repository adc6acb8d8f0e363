"""
依赖注入标记

提供 Inject[...] 字段标记、@inject 属性标记，以及注入点的发现与缓存
"""

import inspect
import sys
import threading
import types
import weakref
from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Dict, ForwardRef, Generic, NamedTuple, Optional, Tuple, TypeVar
from typing import get_args, get_origin, get_type_hints

from ...exceptions import UnsupportedMember
from ..logger import get_logger

logger = get_logger("fieldwire.di")

T = TypeVar('T')

INJECT_ATTR = '__fieldwire_inject__'
MANIFEST_ATTR = '__injection_sites__'

FIELD = 'field'
PROPERTY = 'property'


class _InjectMarker:
    """注入标记（不携带任何数据）"""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'INJECT'


INJECT = _InjectMarker()


class Inject(Generic[T]):
    """
    字段注入标记

    在类注解中使用，等价于 Annotated[T, INJECT]

    Example:
        class OrderService:
            user_repo: Inject[UserRepository]
            _cache: Inject[CacheService]
    """

    def __class_getitem__(cls, item):
        """支持 Inject[Type] 语法"""
        return Annotated[item, INJECT]


def _unwrap(member: Any) -> Any:
    """取出成员上真正承载标记的对象"""
    if isinstance(member, property):
        return member.fget
    if isinstance(member, (classmethod, staticmethod)):
        return member.__func__
    return member


def inject(member):
    """
    属性注入装饰器

    用于标记需要从注册表注入的属性（放在 @property 之上）

    Example:
        class OrderService:
            @inject
            @property
            def cache(self) -> CacheService:
                return self._cache

            @cache.setter
            def cache(self, value):
                self._cache = value

    Note:
        标记方法不会立即报错，但在注入点发现阶段会抛出 UnsupportedMember
    """
    target = _unwrap(member)
    if target is None:
        raise UnsupportedMember(repr(member), reason="属性缺少 getter，无法声明注入类型")
    try:
        setattr(target, INJECT_ATTR, True)
    except (AttributeError, TypeError) as e:
        raise UnsupportedMember(repr(member), reason=f"无法在该对象上设置注入标记: {e}") from e
    return member


def is_marked(member: Any) -> bool:
    """检查成员是否带有 @inject 标记"""
    return getattr(_unwrap(member), INJECT_ATTR, False) is True


class InjectionSite(NamedTuple):
    """注入点：一个带标记的成员及其声明类型"""

    name: str
    service_type: Any
    kind: str
    owner: type

    def assign(self, target: Any, service: Any) -> None:
        """
        将服务实例写入目标对象

        绕过目标类自定义的 __setattr__，属性仍经过其 setter
        """
        try:
            object.__setattr__(target, self.name, service)
        except AttributeError as e:
            raise UnsupportedMember(self.name, self.owner, reason=f"无法写入: {e}") from e


def _lookup_class_attr(cls: type, name: str) -> Any:
    """按 MRO 查找类属性，不触发描述符"""
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return None


def _site_for(cls: type, name: str, service_type: Any) -> InjectionSite:
    """根据类上同名成员的种类构建注入点"""
    if get_origin(service_type) is ClassVar:
        raise UnsupportedMember(name, cls, reason="类变量不是实例字段")

    attr = _lookup_class_attr(cls, name)
    if isinstance(attr, property):
        if attr.fset is None:
            raise UnsupportedMember(name, cls, reason="只读属性无法注入")
        return InjectionSite(name, service_type, PROPERTY, cls)
    if inspect.isroutine(attr) or isinstance(attr, (classmethod, staticmethod)):
        raise UnsupportedMember(name, cls, reason="方法不能作为注入目标")
    # __slots__ 字段以 member_descriptor 的形式存在于类上
    if isinstance(attr, types.MemberDescriptorType) or not hasattr(type(attr), "__get__"):
        return InjectionSite(name, service_type, FIELD, cls)
    raise UnsupportedMember(name, cls, reason=f"不支持的描述符类型: {type(attr).__name__}")


def _own_annotations(klass: type) -> Dict[str, Any]:
    """读取类自身声明的注解，不包含父类，也不对字符串注解求值"""
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # 延迟求值的注解引用了未定义的名称（Python 3.14+），未解析的部分保留为 ForwardRef
        import annotationlib
        return dict(annotationlib.get_annotations(klass, format=annotationlib.Format.FORWARDREF))


def _hint_source(hint: Any) -> Optional[str]:
    """未求值注解的源码文本，已求值的注解返回 None"""
    if isinstance(hint, str):
        return hint
    if isinstance(hint, ForwardRef):
        return hint.__forward_arg__
    return None


def _is_inject_hint(hint: Any) -> bool:
    return get_origin(hint) is Annotated and any(meta is INJECT for meta in hint.__metadata__)


def _evaluate_hint(klass: type, name: str, hint: Any) -> Any:
    """在声明类所在模块的命名空间中单独求值一个注解"""
    module = sys.modules.get(klass.__module__)
    holder = types.SimpleNamespace(__annotations__={name: hint})
    hints = get_type_hints(
        holder,
        globalns=getattr(module, '__dict__', {}),
        localns=dict(vars(klass)),
        include_extras=True
    )
    return hints[name]


def _annotated_sites(cls: type) -> Dict[str, InjectionSite]:
    """
    从类注解中收集 Inject[...] 标记的字段

    逐个成员求值注解，未标记成员的注解无法解析时直接跳过
    """
    declared: Dict[str, Tuple[type, Any]] = {}
    for klass in reversed(cls.__mro__):
        for name, hint in _own_annotations(klass).items():
            declared[name] = (klass, hint)

    sites = {}
    for name, (klass, hint) in declared.items():
        source = _hint_source(hint)
        if source is None and not _is_inject_hint(hint):
            continue
        try:
            hint = _evaluate_hint(klass, name, hint)
        except (NameError, SyntaxError, TypeError) as e:
            if source is not None and 'Inject' not in source and 'INJECT' not in source:
                logger.debug(f"跳过无法解析的注解 {klass.__qualname__}.{name}: {e}")
                continue
            raise UnsupportedMember(name, cls, reason=f"无法解析类型注解: {e}") from e
        if _is_inject_hint(hint):
            sites[name] = _site_for(cls, name, get_args(hint)[0])
    return sites


def _accessor_sites(cls: type) -> Dict[str, InjectionSite]:
    """从类成员中收集 @inject 标记的属性"""
    sites = {}
    seen = set()
    for klass in cls.__mro__:
        for name, member in vars(klass).items():
            # 子类同名成员会遮蔽父类成员
            if name in seen:
                continue
            seen.add(name)
            if not is_marked(member):
                continue
            if not isinstance(member, property):
                raise UnsupportedMember(name, cls, reason="@inject 只能用于字段或属性")
            if member.fset is None:
                raise UnsupportedMember(name, cls, reason="只读属性无法注入")
            try:
                hints = get_type_hints(member.fget)
            except (NameError, SyntaxError, TypeError) as e:
                raise UnsupportedMember(name, cls, reason=f"无法解析返回类型注解: {e}") from e
            if 'return' not in hints:
                raise UnsupportedMember(name, cls, reason="属性 getter 缺少返回类型注解")
            sites[name] = InjectionSite(name, hints['return'], PROPERTY, cls)
    return sites


def _manifest_sites(cls: type) -> Dict[str, InjectionSite]:
    """从 __injection_sites__ 清单中收集显式声明的注入点"""
    manifest = getattr(cls, MANIFEST_ATTR, None)
    if manifest is None:
        return {}
    if not isinstance(manifest, Mapping):
        raise UnsupportedMember(MANIFEST_ATTR, cls, reason="注入清单必须是 名称 -> 类型 的映射")
    return {name: _site_for(cls, name, service_type) for name, service_type in manifest.items()}


def discover_injection_sites(cls: type) -> Tuple[InjectionSite, ...]:
    """
    发现类型上的全部注入点（不使用缓存）

    Args:
        cls: 目标类型

    Returns:
        注入点元组

    Raises:
        UnsupportedMember: 如果标记被用在字段或可写属性以外的成员上
    """
    sites = _annotated_sites(cls)
    sites.update(_accessor_sites(cls))
    sites.update(_manifest_sites(cls))
    return tuple(sites.values())


_site_cache: "weakref.WeakKeyDictionary[type, Tuple[InjectionSite, ...]]" = weakref.WeakKeyDictionary()
_site_cache_lock = threading.Lock()


def get_injection_sites(cls: type) -> Tuple[InjectionSite, ...]:
    """
    获取类型的注入点，每个类型只计算一次

    Args:
        cls: 目标类型

    Returns:
        注入点元组
    """
    with _site_cache_lock:
        cached = _site_cache.get(cls)
    if cached is not None:
        return cached

    sites = discover_injection_sites(cls)
    with _site_cache_lock:
        _site_cache[cls] = sites
    logger.debug(f"已发现 {cls.__qualname__} 的注入点: {[site.name for site in sites]}")
    return sites


def has_injection_sites(obj: Any) -> bool:
    """检查对象（或类型）是否声明了注入点"""
    cls = obj if isinstance(obj, type) else type(obj)
    return len(get_injection_sites(cls)) > 0


def clear_injection_site_cache() -> None:
    """清空注入点缓存"""
    with _site_cache_lock:
        _site_cache.clear()

