import re

UNCOUNTABLE = {"equipment", "information", "money", "news", "series", "sheep", "species", "fish"}

IRREGULAR = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "ox": "oxen",
}

PLURAL_RULES = [
    (r"(quiz)$", r"\1zes"),
    (r"(matr|vert|ind)(?:ix|ex)$", r"\1ices"),
    (r"(x|ch|ss|sh)$", r"\1es"),
    (r"([^aeiouy]|qu)y$", r"\1ies"),
    (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
    (r"sis$", "ses"),
    (r"(bu|alia|statu)s$", r"\1ses"),
    (r"(octop|vir)us$", r"\1i"),
    (r"(ax|test)is$", r"\1es"),
    (r"s$", "s"),
    (r"$", "s"),
]

SINGULAR_RULES = [
    (r"(quiz)zes$", r"\1"),
    (r"(matr)ices$", r"\1ix"),
    (r"(vert|ind)ices$", r"\1ex"),
    (r"(alias|status|bus)(es)?$", r"\1"),
    (r"(octop|vir)(us|i)$", r"\1us"),
    (r"(cris|ax|test)(is|es)$", r"\1is"),
    (r"(shoe)s$", r"\1"),
    (r"(o)es$", r"\1"),
    (r"(x|ch|ss|sh)es$", r"\1"),
    (r"([^aeiouy]|qu)ies$", r"\1y"),
    (r"([lr])ves$", r"\1f"),
    (r"([^f])ves$", r"\1fe"),
    (r"(analy|ba|diagno|parenthe|progno|synop|the)(sis|ses)$", r"\1sis"),
    (r"(ss)$", r"\1"),
    (r"s$", ""),
]


def _apply(word, rules, irregular):
    if not word:
        return word
    # only the last underscore-separated part is inflected
    head, sep, last = word.rpartition("_")
    lower = last.lower()
    if lower in UNCOUNTABLE:
        return word
    if lower in irregular:
        return head + sep + irregular[lower]
    for pattern, replacement in rules:
        if re.search(pattern, last, re.IGNORECASE):
            return head + sep + re.sub(pattern, replacement, last, count=1, flags=re.IGNORECASE)
    return word


def pluralize(word):
    if word.lower().rpartition("_")[2] in IRREGULAR.values():
        return word
    return _apply(word, PLURAL_RULES, IRREGULAR)


def singularize(word):
    if word.lower().rpartition("_")[2] in IRREGULAR:
        return word
    return _apply(word, SINGULAR_RULES, {v: k for k, v in IRREGULAR.items()})


def underscore(word):
    """BlogPost, blogPost and blog-post all become blog_post."""
    word = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", word)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    return word.replace("-", "_").lower()

