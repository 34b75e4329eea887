"""
melonhatch.templates - Bundled Template Files
=============================================

Template Layout
---------------
mod/
    The default mod project tree. Text files use ``$KEY$`` placeholders
    (see ``melonhatch.generator`` for the keys) and ``MyMod`` in a file or
    directory name is replaced with the mod name.

    - MyMod.csproj: SDK-style project with the resolved references
    - MyMod.cs: MelonMod entry point and MelonInfo/MelonGame attributes
    - README.md: build instructions
    - .gitignore: build output patterns

references.xml.j2
    Jinja2 template rendering the ``<Reference>`` items that are
    substituted for ``$PROJ_REFERENCES$``. Receives ``references``, a
    list of ``Path`` objects.
"""

# This file intentionally left mostly empty.
# references.xml.j2 is loaded by Jinja2's PackageLoader, mod/ is read directly.
