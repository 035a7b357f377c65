# License: BSD3

"""
Counts over loaded NomBank entries, to sanity check a load
"""

from collections import Counter

from tabulate import tabulate

from ptbnom.util import concat


def count_pointer_types(entries):
    """
    Number of annotations of each `PointerType`

    :rtype: Counter
    """
    return Counter(anno.pointer_type
                   for anno in concat(e.annotations for e in entries))


def count_labels(entries):
    """
    Number of annotations for each role label (`ARG0`, `Support`...)

    :rtype: Counter
    """
    return Counter(anno.label
                   for anno in concat(e.annotations for e in entries))


def count_sections(entries):
    """
    Number of entries in each treebank section

    :rtype: Counter
    """
    return Counter(e.section for e in entries)


def count_table(counts, title=None, keys=None, total=True):
    """
    Table with one row per key of a counter, most frequent first,
    and a final total row unless `total` is False
    """
    if keys is None:
        keys = [k for k, _ in counts.most_common()]
    rows = [[key, counts[key]] for key in keys]
    if total:
        rows.append(["TOTAL", sum(counts.values())])
    headers = [title or "", "total"]
    return tabulate(rows, headers=headers)


def summary(entries, errors=()):
    """
    Text report on a NomBank load: counts of entries per section, of
    annotations per pointer type and per label, and of the lines that
    were skipped (see the `errors` parameter of
    `ptbnom.nombank.corpus.load`)
    """
    entries = list(entries)
    ptypes = Counter(dict((k.value, v) for k, v in
                          count_pointer_types(entries).items()))
    sections = Counter(dict(('wsj/%02d' % k, v) for k, v in
                            count_sections(entries).items()))
    blocks = [count_table(sections, title="section",
                          keys=sorted(sections)),
              count_table(ptypes, title="pointer type"),
              count_table(count_labels(entries), title="label")]
    errors = list(errors)
    if errors:
        causes = Counter(type(err.cause).__name__ for err in errors)
        blocks.append(count_table(causes, title="skipped lines"))
    return "\n\n".join(blocks)
