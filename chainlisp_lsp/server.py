from __future__ import annotations

"""
A minimal pygls-based Language Server for chainlisp.

Features:
- Initialize/Shutdown/Exit
- Text synchronization and document store
- Diagnostics: reader errors, unmatched parens
- Hover: keyword signatures and locally defined symbols
- Completion: keywords and locally defined symbols
- Signature Help: for keywords and locally defined functions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    InitializeParams,
    InitializeResult,
    TextDocumentSyncKind,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    SignatureHelp,
    SignatureInformation,
    ParameterInformation,
    SignatureHelpParams,
)

from chainlisp.config import configure_logging
from chainlisp_lsp.indexer import build_index, KEYWORD_SIGNATURES, DocumentIndex

WORD_BREAKS = " \t()'\n\r"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class ChainlispLanguageServer(LanguageServer):
    CMD_NAME = "chainlisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "0.1.0")
        self.documents: Dict[str, DocumentState] = {}


ls = ChainlispLanguageServer()


@ls.feature("initialize")
def on_initialize(params: InitializeParams):
    return InitializeResult(
        capabilities={
            "textDocumentSync": TextDocumentSyncKind.Full,
            "hoverProvider": True,
            "completionProvider": {"resolveProvider": False, "triggerCharacters": ["("]},
            "signatureHelpProvider": {"triggerCharacters": ["(", " "]},
            "documentSymbolProvider": True,
        }
    )


@ls.feature("shutdown")
def on_shutdown(*_):
    return None


@ls.feature("exit")
def on_exit(*_):
    return None


# --- Text sync ---
def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, diagnostics_for(idx))


@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    _update(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + 1))


def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source=ChainlispLanguageServer.CMD_NAME,
            )
        )

    # The reader reports unbalanced input too; avoid saying it twice
    elif idx.syntax_error:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message=idx.syntax_error,
                severity=DiagnosticSeverity.Error,
                source=ChainlispLanguageServer.CMD_NAME,
            )
        )

    return diags


# --- Hover ---
def hover_text(idx: DocumentIndex, word: str) -> Optional[str]:
    if word in KEYWORD_SIGNATURES:
        return KEYWORD_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    if sdef.kind == 'function':
        return f"{sdef.signature} - function (defined at {sdef.line+1}:{sdef.col+1})"
    return f"{word} - {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = hover_text(state.index, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    if not state:
        return CompletionList(is_incomplete=False, items=items)

    for name, sig in KEYWORD_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig))
    for name, sdef in state.index.symbols.items():
        if sdef.kind == 'function':
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sdef.signature))
        else:
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Variable))

    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
def signature_for(idx: DocumentIndex, callee: str) -> Optional[str]:
    sig = KEYWORD_SIGNATURES.get(callee)
    if sig:
        return sig
    sdef = idx.symbols.get(callee)
    if sdef is not None and sdef.kind == 'function':
        return sdef.signature
    return None


@ls.feature("textDocument/signatureHelp")
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    # crude: the token right after the last '(' on the current line
    callee = extract_callee_name(get_line_prefix(state.text, params.position))
    if not callee:
        return None

    label = signature_for(state.index, callee)
    if not label:
        return None

    params_text = label[label.find('(') + 1:label.rfind(')')]
    parameters = [ParameterInformation(label=p) for p in params_text.split()[1:]]

    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []

    for name, sdef in state.index.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == 'function' else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---

def get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    tail = prefix[lp + 1:].split()
    if not tail:
        return None
    return tail[0].rstrip(')') or None


def main() -> None:
    configure_logging()
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
