from lark import Lark


# Grammar for .topo topology descriptions
grammar = r"""
    start: item* docs

    item: group
        | domain_def

    group: docs "group" NAME "{" domain_def* docs "}"

    domain_def: docs "domain" NAME domain_attr* "{" member_list "}"
    domain_attr: bits_attr
        | base_attr
        | reserved_attr
        | unknown_attr
        | alias_attr
    bits_attr: "bits" NUMBER
    base_attr: "base" NUMBER
    reserved_attr: "reserved" NUMBER ("," NUMBER)*
    unknown_attr: "unknown" NUMBER
    alias_attr: "alias" NAME

    docs: DOC_COMMENT*

    member_list: (member ("," member)* ","?)? docs
    member: docs NAME ("=" NUMBER)?

    DOC_COMMENT: /\/\/\/[^\n]*/
    LOCAL_COMMENT: /\/\/(?!\/)[^\n]*/
    C_COMMENT: /\/\*[\s\S]*?\*\//

    NAME: /[a-zA-Z_][a-zA-Z0-9_]*/
    NUMBER: /0[xX][0-9a-fA-F]+|0[bB][01]+|[0-9]+/

    %import common.WS
    %ignore WS
    %ignore LOCAL_COMMENT
    %ignore C_COMMENT
"""

parser = Lark(
    grammar,
    start='start',
    parser='lalr',
    propagate_positions=True
)


def parse_number(text: str) -> int:
    text = str(text)
    if text[:2] in ('0x', '0X'):
        return int(text, 16)
    if text[:2] in ('0b', '0B'):
        return int(text, 2)
    return int(text, 10)


def parse_topology_dsl(text):
    return parser.parse(text)
