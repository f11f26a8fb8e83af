from graphviz import Digraph
from Calculator import CalcDebug, evaluate
from Tokenizer import Token


class ParseTreeVis:
    _graph: Digraph
    debug: bool

    nt_color = "#40E0D0"
    token_color = "#FF69B4"
    eof_color = "#A9A9A9"

    def __init__(self, filename: str = "graph/out.dot",
                 debug: bool = False) -> None:
        self._graph = Digraph('parse', filename=filename,
                              node_attr={'shape': 'record'})
        self.debug = debug
        self._cnt = 0

    @staticmethod
    def _escape(sym: str) -> str:
        # Characters with a meaning inside record labels
        for c in "\\{}|<>\"":
            sym = sym.replace(c, "\\" + c)
        return sym

    def _name(self, prefix: str) -> str:
        name = f"{prefix}{self._cnt}"
        self._cnt += 1
        return name

    def _nt(self, nt: CalcDebug.NT) -> str:
        name = self._name("nt")
        value = "?" if nt.value is None else str(nt.value)
        self._graph.node(name, f"{{{nt.name}|{self._escape(value)}}}",
                         color=ParseTreeVis.nt_color)
        return name

    def _token(self, token: Token) -> str:
        # EOF only shows up in debug mode
        if token.type == Token.EOF and not self.debug:
            return None

        name = self._name("tok")
        kind = token.kind_name(token.type)
        if token.type == Token.EOF:
            self._graph.node(name, f"{{{kind}}}", color=ParseTreeVis.eof_color,
                             fontcolor=ParseTreeVis.eof_color)
        else:
            label = f"{{{kind}|{self._escape(token.sym)}}}"
            if self.debug:
                label = f"{{{kind}|{self._escape(token.sym)}|col {token.col}}}"
            self._graph.node(name, label, color=ParseTreeVis.token_color,
                             fontcolor=ParseTreeVis.token_color)
        return name

    def _item(self, item) -> str:
        if isinstance(item, CalcDebug.NT):
            return self._nt(item)
        elif isinstance(item, Token):
            return self._token(item)
        else:
            raise Exception("Cannot draw debug node that is neither a "
                            f"nonterminal nor a token {item}")

    def tree(self, debug: CalcDebug) -> None:
        # (item, parent node name); nodes are named in pre-order
        work = [(item, None) for item in reversed(debug.root)]

        while work:
            item, parent = work.pop()
            name = self._item(item)
            if name and parent:
                self._graph.edge(parent, name)
            if isinstance(item, CalcDebug.NT):
                work.extend((c, name) for c in reversed(item.components))

    @property
    def source(self) -> str:
        return self._graph.source

    def save(self) -> str:
        return self._graph.save()

    def render(self) -> str:
        return self._graph.render()


if __name__ == "__main__":
    debug = CalcDebug()
    evaluate("-(1 + 2) * 3 - 4 / 2", debug=debug)

    vis = ParseTreeVis(debug=True)
    vis.tree(debug)
    vis.render()
