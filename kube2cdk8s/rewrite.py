"""Line-oriented rewriting of kube2pulumi TypeScript into cdk8s calls.

kube2pulumi emits a few import lines followed by a single declaration:

    const my_podPod = new kubernetes.core.v1.Pod("my_podPod", {
        apiVersion: "v1",
        kind: "Pod",
        ...

The declaration is swapped for `new k8s.KubePod(this, "my-pod", {` and the
apiVersion/kind fields it replaces are dropped. The code is never parsed.
"""

import re

IMPORT_MARKER = "import"
DECLARATION_MARKER = "const"

CONSTRUCTOR_TEMPLATE = 'new k8s.Kube{kind}(this, "{name}", {{'


def _line_pattern(marker):
    # The newline run in front of the line is consumed too, so the
    # replacement lands where the blank import block used to be
    return re.compile(r"[\r\n]+^.*" + re.escape(marker) + r".*$", re.MULTILINE)


DECLARATION_RE = _line_pattern(DECLARATION_MARKER)


def strip_imports(code, marker=IMPORT_MARKER):
    """Blanks out every line containing an import statement

    The number of lines is left unchanged.
    """
    lines = code.split("\n")
    return "\n".join("" if marker in line else line for line in lines)


def constructor_call(kind, name):
    return CONSTRUCTOR_TEMPLATE.format(kind=kind, name=name)


def rewrite_declaration(code, replacement, pattern=DECLARATION_RE):
    """Replaces the first declaration line with replacement

    Args:
        code (string): Generated code
        replacement (string): Text to put in place of the declaration
        pattern (re.Pattern): Pattern matching the declaration line

    Returns:
        tuple: (code, whether a declaration was replaced)
    """
    # A callable keeps backslashes in the replacement literal
    code, count = pattern.subn(lambda _: replacement, code, count=1)
    return code, bool(count)


def drop_first_line(code, marker):
    """Removes the first line containing marker, with the newlines before it"""
    match = _line_pattern(marker).search(code)
    if match is None:
        return code
    return code[: match.start()] + code[match.end():]


def rewrite(code, kind, name):
    """Turns kube2pulumi output for one manifest into a cdk8s snippet

    If no declaration is found, only the imports are removed.
    """
    code = strip_imports(code)
    code, replaced = rewrite_declaration(code, constructor_call(kind, name))
    if not replaced:
        return code

    code = drop_first_line(code, "apiVersion")
    return drop_first_line(code, "kind")
