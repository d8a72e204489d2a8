"""Base class for composable generators.

A generator declares hooks on other generators with ``hook_for``. Each hook
installs an option; when a run sets that option, the value is resolved to a
generator class through the catalog and that class is invoked in turn.

Example:
    class ControllerGenerator(Generator, namespace="genhooks:generators:controller"):
        def generate(self) -> None:
            ...

    ControllerGenerator.hook_for("test_framework", aliases="-t")
"""

from __future__ import annotations

import builtins
import logging
import re
import sys
from pathlib import Path
from typing import Any, Callable, ClassVar, Iterable, Iterator, Mapping

from genhooks import settings
from genhooks.errors import GeneratorError, MalformedHookError, NameCollisionError
from genhooks.models import (
    HookDeclaration,
    OptionDescriptor,
    camelize,
    classify,
    default_from,
    humanize,
    underscore,
)
from genhooks.registry import catalog
from genhooks.shell import Shell

logger = logging.getLogger(__name__)

InvocationBlock = Callable[["Generator", type["Generator"]], Any]

BEHAVIORS = ("invoke", "revoke")


class Generator:
    """A unit of scaffolding work that can invoke other generators."""

    description: ClassVar[str | None] = None

    def __init_subclass__(cls, namespace: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if namespace is not None:
            cls._namespace = namespace
        catalog.register(cls)

    # Naming

    @classmethod
    def namespace(cls) -> str:
        """Module path and class name, underscored, without the generator suffix.

        ``test_unit.generators.ControllerGenerator`` has the namespace
        ``test_unit:generators:controller``.
        """
        if "_namespace" not in cls.__dict__:
            parts = cls.__module__.split(".") + [cls.__name__]
            namespace = ":".join(underscore(part) for part in parts)
            cls._namespace = re.sub(r"_generator$", "", namespace)
        return cls._namespace

    @classmethod
    def base_name(cls) -> str:
        if "_base_name" not in cls.__dict__:
            cls._base_name = cls.namespace().split(":")[0]
        return cls._base_name

    @classmethod
    def generator_name(cls) -> str:
        """Class name without the ``Generator`` suffix, e.g. ``controller``."""
        if "_generator_name" not in cls.__dict__:
            cls._generator_name = underscore(re.sub(r"Generator$", "", cls.__name__))
        return cls._generator_name

    @classmethod
    def source_root(cls) -> Path:
        """Directory holding this generator's templates."""
        if "_source_root" not in cls.__dict__:
            module_file = getattr(sys.modules.get(cls.__module__), "__file__", None)
            directory = Path(module_file).resolve().parent if module_file else Path.cwd()
            cls._source_root = directory / cls.generator_name() / "templates"
        return cls._source_root

    @classmethod
    def desc(cls) -> str:
        """Description from the class, a USAGE file beside the templates, or a default."""
        if cls.__dict__.get("description"):
            return cls.description

        usage = cls.source_root().parent / "USAGE"
        if usage.exists():
            return usage.read_text()
        return (
            "Description:\n"
            f"    Create {humanize(cls.base_name()).lower()} files for "
            f"{cls.generator_name()} generator."
        )

    # Class-level stores, copied from the parent class on first access

    @classmethod
    def _from_superclass(cls, method: str, default: Any) -> Any:
        for base in cls.__bases__:
            if issubclass(base, Generator):
                return getattr(base, method)().copy()
        return default

    @classmethod
    def class_options(cls) -> dict[str, OptionDescriptor]:
        if "_class_options" not in cls.__dict__:
            cls._class_options = cls._from_superclass("class_options", {})
        return cls._class_options

    @classmethod
    def invocations(cls) -> list[HookDeclaration]:
        """Hooks declared on this class and its ancestors, in declaration order."""
        if "_invocations" not in cls.__dict__:
            cls._invocations = cls._from_superclass("invocations", [])
        return cls._invocations

    @classmethod
    def invocation_blocks(cls) -> dict[str, InvocationBlock]:
        if "_invocation_blocks" not in cls.__dict__:
            cls._invocation_blocks = cls._from_superclass("invocation_blocks", {})
        return cls._invocation_blocks

    @classmethod
    def hook(cls, name: str) -> HookDeclaration | None:
        for declaration in cls.invocations():
            if declaration.name == name:
                return declaration
        return None

    # Options

    @classmethod
    def class_option(cls, name: str, **options: Any) -> OptionDescriptor:
        """Install an option, filling description, aliases and default.

        Aliases and default come from the process-wide settings when they
        are not given.

        Raises:
            GeneratorError: If the option is invalid.
        """
        options.setdefault(
            "description", f"Indicates when to generate {humanize(name).lower()}"
        )
        if "aliases" not in options:
            options["aliases"] = settings.aliases_for(name)
        if "default" not in options:
            options["default"] = settings.default_for(name)

        try:
            descriptor = OptionDescriptor(name=name, **options)
        except ValueError as e:
            raise GeneratorError(f"Invalid option '{name}': {e}") from e

        cls.class_options()[descriptor.name] = descriptor
        return descriptor

    @classmethod
    def remove_class_option(cls, name: str) -> None:
        cls.class_options().pop(name, None)

    @classmethod
    def add_shebang_option(cls) -> None:
        """Add a ``python`` option and a ``shebang`` property built from it."""
        cls.class_option(
            "python",
            type="string",
            aliases="-p",
            default=sys.executable,
            description="Path to the Python interpreter of your choice",
            banner="PATH",
        )
        cls.shebang = property(_shebang)

    # Hooks

    @classmethod
    def hook_for(
        cls,
        *names: str,
        as_: str | None = None,
        verbose: str | bool = "white",
        block: InvocationBlock | None = None,
        **options: Any,
    ) -> None:
        """Invoke a generator chosen by the value of the option ``name``.

        ``ControllerGenerator.hook_for("test_framework", aliases="-t")`` adds a
        ``--test-framework`` option. Running the controller generator with
        ``--test-framework=test_unit`` then tries, in order::

            "genhooks:generators:test_unit", "test_unit:generators:controller", "test_unit"

        A boolean hook (``type="boolean"``, or a hook whose default is a flag)
        invokes the generator named after the hook itself. ``block`` customises the invocation; it receives the
        running generator and the resolved class.

        Raises:
            MalformedHookError: If the declaration cannot work.
        """
        if not names:
            raise MalformedHookError("hook_for needs at least one hook name")

        as_name = as_ or cls.generator_name()

        for name in names:
            if not isinstance(name, str) or not name.isidentifier():
                raise MalformedHookError(f"Hook name must be an identifier, got {name!r}")
            cls._check_option_conflict(name)

            if options.get("type") == "boolean":
                defaults: dict[str, Any] = {}
            elif default_from(options.get("default", settings.default_for(name))).kind == "bool":
                # A flag default makes the hook a flag unless a type was given
                defaults = {"type": "boolean", "banner": ""}
            else:
                defaults = {"description": f"{humanize(name)} to be invoked", "banner": "NAME"}

            try:
                cls.class_option(name, **{**defaults, **options})
            except GeneratorError as e:
                raise MalformedHookError(f"Invalid hook '{name}': {e}") from e

            declaration = HookDeclaration(
                name=name, base=cls.base_name(), as_name=as_name, verbose=verbose
            )
            hooks = cls.invocations()
            for index, existing in enumerate(hooks):
                if existing.name == name:
                    hooks[index] = declaration
                    break
            else:
                hooks.append(declaration)

            if block is not None:
                cls.invocation_blocks()[name] = block

    @classmethod
    def _check_option_conflict(cls, name: str) -> None:
        existing = cls.class_options().get(name)
        if existing is None or cls.hook(name) is not None:
            return
        raise MalformedHookError(
            f"Cannot hook '{name}': it is already a {existing.type} option"
        )

    @classmethod
    def remove_hook_for(cls, *names: str) -> None:
        """Remove hooks together with their options and invocation blocks.

        Raises:
            MalformedHookError: If the class already has instances.
        """
        if cls.__dict__.get("_has_instances"):
            raise MalformedHookError(
                f"Cannot remove hooks from {cls.__name__} after it has been instantiated"
            )

        for name in names:
            cls.remove_class_option(name)
            cls.invocations()[:] = [h for h in cls.invocations() if h.name != name]
            cls.invocation_blocks().pop(name, None)

    # Help

    @classmethod
    def options_from_invocations(
        cls,
        group_options: dict[str, list[OptionDescriptor]],
        base_options: Mapping[str, OptionDescriptor],
        nested: bool = True,
    ) -> dict[str, list[OptionDescriptor]]:
        """Collect the options of hooked generators into ``group_options``.

        Hooked classes are only resolved, never instantiated. Options already
        in ``base_options``, options with their own group and options already
        collected are left out. With ``nested``, the hooks of each hooked class
        are visited once more.
        """
        for declaration in cls.invocations():
            option = cls.class_options().get(declaration.name)
            if option is None:
                continue

            klass_name = declaration.name if option.type == "boolean" else option.value
            if not klass_name:
                continue

            klass = catalog.find_by_namespace(klass_name, declaration.base, declaration.as_name)
            if klass is None:
                continue

            claimed = {o.name for group in group_options.values() for o in group}
            group = group_options.setdefault(classify(klass_name), [])
            group.extend(
                o
                for o in klass.class_options().values()
                if o.name not in base_options and o.group is None and o.name not in claimed
            )

            if nested:
                klass.options_from_invocations(group_options, base_options, nested=False)

        return group_options

    @classmethod
    def class_options_help(
        cls, extra_group: Mapping[str, list[OptionDescriptor]] | None = None
    ) -> dict[str, list[OptionDescriptor]]:
        """Options grouped for help output, own options first."""
        groups: dict[str, list[OptionDescriptor]] = {"Options": []}
        for option in cls.class_options().values():
            if not option.hide:
                groups.setdefault(option.group or "Options", []).append(option)

        invoked: dict[str, list[OptionDescriptor]] = {}
        cls.options_from_invocations(invoked, cls.class_options())
        for label, options in invoked.items():
            visible = [o for o in options if not o.hide]
            if visible:
                groups.setdefault(label, []).extend(visible)

        for label, options in (extra_group or {}).items():
            groups.setdefault(label, []).extend(options)
        return groups

    # Running

    def __init__(
        self,
        args: Iterable[str] = (),
        options: Mapping[str, Any] | None = None,
        *,
        shell: Shell | None = None,
        behavior: str = "invoke",
        invoked: set[type[Generator]] | None = None,
    ) -> None:
        if behavior not in BEHAVIORS:
            raise GeneratorError(f"Unknown behavior '{behavior}', expected one of {BEHAVIORS}")

        type(self)._has_instances = True
        self.args = list(args)
        self.options = {name: o.value for name, o in type(self).class_options().items()}
        self.options.update(options or {})
        self.shell = shell or Shell()
        self.behavior = behavior
        self._invoked = invoked if invoked is not None else set()
        self._invoked.add(type(self))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.namespace()} args={self.args!r}>"

    def generate(self) -> None:
        """Do this generator's own work. Runs before its hooks."""

    def invoke_all(self) -> None:
        """Run ``generate`` and then every declared hook."""
        self.generate()
        for declaration in type(self).invocations():
            self.run_hook(declaration.name)

    def run_hook(self, name: str) -> None:
        """Invoke the generator selected by the value of the option ``name``.

        Targets that cannot be found are reported and skipped.
        """
        declaration = type(self).hook(name)
        if declaration is None:
            raise MalformedHookError(f"{type(self).__name__} has no hook named '{name}'")

        value = self.options.get(name)
        if not value:
            return

        target = name if value is True else str(value)
        klass = catalog.find_by_namespace(target, declaration.base, declaration.as_name)
        if klass is None:
            self.shell.say_status("error", f"{target} [not found]", "red")
            return

        self.shell.say_status("invoke", target, declaration.verbose)
        with self.shell.padded():
            block = type(self).invocation_blocks().get(name)
            if block is not None:
                block(self, klass)
            else:
                self.invoke(klass)

    def invoke(
        self,
        klass: type[Generator],
        args: Iterable[str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Generator | None:
        """Run another generator with this run's arguments, options and shell.

        Each class runs at most once per root invocation.
        """
        if klass in self._invoked:
            logger.debug("Skipping %s, already invoked", klass.namespace())
            return None

        instance = klass(
            self.args if args is None else args,
            {**self.options, **(options or {})},
            shell=self.shell,
            behavior=self.behavior,
            invoked=self._invoked,
        )
        instance.invoke_all()
        return instance

    # Collisions

    def host_scope(self) -> Mapping[str, Any]:
        """Top-level names generated code would share: loaded modules and builtins."""
        return {**vars(builtins), **sys.modules}

    def class_collisions(self, *class_names: Any) -> None:
        """Refuse names that are already defined in the host scope.

        Only checked while generating; destroying skips it.

        Raises:
            NameCollisionError: If a name is already taken.
        """
        if self.behavior != "invoke":
            return

        for class_name in _flatten(class_names):
            class_name = str(class_name).strip()
            if not class_name:
                continue

            nesting = re.split(r"::|\.", class_name)
            last_name = nesting.pop()

            scope: Mapping[str, Any] | None = self.host_scope()
            for nest in nesting:
                if nest not in scope:
                    scope = None
                    break
                scope = vars(scope[nest]) if hasattr(scope[nest], "__dict__") else {}

            if scope is not None and camelize(last_name) in scope:
                raise NameCollisionError(class_name)


def _flatten(items: Iterable[Any]) -> Iterator[Any]:
    for item in items:
        if isinstance(item, (list, tuple, set)):
            yield from _flatten(item)
        else:
            yield item


def _shebang(self: Generator) -> str:
    python = self.options.get("python")
    if python == sys.executable:
        command = f"/usr/bin/env {Path(sys.executable).name}"
    else:
        command = python
    return f"#!{command}"
