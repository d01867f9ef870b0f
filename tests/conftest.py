"""
Shared fixtures: a listing page, a post page with an embedded payload and
factories wiring controllers against in-memory storage.
"""

import json

import pytest

from bilang.app.dom.document import PageDocument
from bilang.app.dom.engine import DomTranslationEngine
from bilang.app.i18n.dictionary import load_dictionaries
from bilang.app.i18n.routes import RouteMap
from bilang.app.lang.resolver import LocaleResolver
from bilang.app.lang.state import LocaleCodes
from bilang.app.lang.store import LocaleStore
from bilang.app.storage.backends import MemoryStorage
from bilang.app.toggle.controller import ToggleController
from bilang.app.utils.config import Config, reset_config


HOME_HTML = """<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="utf-8"><title>Blog</title></head>
<body data-layout="home">
  <aside id="sidebar">
    <ul class="nav flex-column">
      <li class="nav-item"><a href="/" class="nav-link"><i class="fa-fw fas fa-home"></i><span>INÍCIO</span></a></li>
      <li class="nav-item"><a href="/categories/" class="nav-link"><span>CATEGORIAS</span></a></li>
      <li class="nav-item"><a href="/tags/" class="nav-link"><span>ETIQUETAS</span></a></li>
      <li class="nav-item"><a href="/archives/" class="nav-link"><span>ARQUIVOS</span></a></li>
      <li class="nav-item"><a href="/about/" class="nav-link"><span>SOBRE</span></a></li>
    </ul>
  </aside>
  <div id="topbar">
    <button id="language-toggle" type="button"><span id="current-lang">PT-BR</span></button>
    <input id="search-input" type="search" placeholder="Buscar...">
    <button id="search-cancel" type="button">Cancelar</button>
  </div>
  <div id="main-wrapper">
    <div id="post-list">
      <article class="card-wrapper card">
        <a href="/exemplo-traducao-post/" class="post-preview row g-0">
          <div class="card-body">
            <h1 class="card-title my-2 mt-md-0">Exemplo de Post com Tradução</h1>
            <div class="card-text mt-0 mb-3">
              <p>E aí, pessoal! Hoje vou te mostrar como criar um **blog multilíngue** usando Jekyll e JavaScript. É uma funcionalidade super útil para alcançar uma **audiência global** com seu conteúdo.</p>
            </div>
          </div>
        </a>
      </article>
      <article class="card-wrapper card">
        <a href="/rascunho-deploys/" class="post-preview row g-0">
          <div class="card-body">
            <h1 class="card-title my-2 mt-md-0">Guerra dos Deploys em 2025</h1>
            <div class="card-text mt-0 mb-3">
              <p>E aí, pessoal! Um texto novo sem tradução.</p>
            </div>
          </div>
        </a>
      </article>
      <article class="card-wrapper card">
        <a href="/notas-rust/" class="post-preview row g-0">
          <div class="card-body">
            <h1 class="card-title my-2 mt-md-0">Notas sobre Rust</h1>
            <div class="card-text mt-0 mb-3">
              <p>Notas rápidas sobre Rust.</p>
            </div>
          </div>
        </a>
      </article>
    </div>
  </div>
  <div id="panel-wrapper">
    <section id="access-lastmod">
      <h2 class="panel-heading">Atualizados recentemente</h2>
      <ul class="list-unstyled ps-0 pb-1 ms-1 mt-2">
        <li class="text-truncate lh-lg"><a href="/do-zero-a-um-operator-kubernetes/">Do zero a um Operador Kubernetes que observa ConfigMaps</a></li>
        <li class="text-truncate lh-lg"><a href="/notas/">Notas soltas</a></li>
      </ul>
    </section>
    <section id="access-tags">
      <h2 class="panel-heading">Etiquetas em alta</h2>
      <div class="d-flex flex-wrap mt-3 mb-1 me-3">
        <a class="post-tag btn btn-outline-primary" href="/tags/exemplo/">exemplo</a>
        <a class="post-tag btn btn-outline-primary" href="/tags/kubernetes/">kubernetes</a>
        <a class="post-tag btn btn-outline-primary" href="/tags/observabilidade/">observabilidade</a>
      </div>
    </section>
  </div>
  <footer>
    <p>© 2025 <a href="https://github.com/autor">autor</a>. <span data-bs-toggle="tooltip" data-bs-placement="top" title="CC BY 4.0">Alguns direitos reservados.</span></p>
  </footer>
  <div class="ko-fi-container"><a href="https://ko-fi.com/autor" target="_blank"><i class="fas fa-coffee"></i> Me compre um café ☕</a></div>
</body>
</html>
"""

POST_PAYLOAD = {
    "translations": {
        "title": {
            "pt-BR": "Exemplo de Post com Tradução",
            "en": "Example Post with Translation",
        },
        "subtitle": {
            "pt-BR": "Um guia prático",
            "en": "A practical guide",
        },
        "content": {
            "pt-BR": "Olá **mundo**.",
            "en": "## Introduction\n\nHello **world**, see [docs](https://example.com/docs).",
        },
    }
}

POST_TEMPLATE = """<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="utf-8"><meta name="layout" content="post"><title>Exemplo</title></head>
<body>
  <div id="topbar">
    <button id="language-toggle" type="button"><span id="current-lang">PT-BR</span></button>
  </div>
  <article class="px-1">
    <header>
      <h1 data-toc-skip>Exemplo de Post com Tradução</h1>
      <p class="post-desc fw-light mb-4">Um guia prático</p>
      <div class="post-meta text-muted">
        <span>Postado em <time data-ts="1700000000" data-df="ll">14 nov 2023</time></span>
        <span>Atualizado em <time data-ts="1700100000" data-df="ll">15 nov 2023</time></span>
      </div>
    </header>
    <div class="content"><p>Olá <strong>mundo</strong>.</p>
<h2 id="introducao">Introdução</h2></div>
    <div class="post-tail-wrapper">
      <div class="post-tags"><a href="/tags/exemplo/" class="post-tag">exemplo</a> <a href="/tags/traducao/" class="post-tag">tradução</a></div>
      <div class="license-wrapper">Esta postagem está licenciada sob <a href="https://creativecommons.org/licenses/by/4.0/">CC BY 4.0</a> pelo autor.</div>
      <div class="share-wrapper"><span class="share-label">Compartilhar</span></div>
    </div>
  </article>
  <aside id="related-posts">
    <h3 id="related-label">Leia também</h3>
    <div class="card"><h4 class="card-title">Criando um Provider Terraform Customizado do Zero</h4></div>
  </aside>
  <nav class="post-navigation d-flex justify-content-between" aria-label="Post Navigation">
    <a href="/anterior/" class="btn btn-outline-primary" aria-label="Anterior"><p>A</p></a>
    <a href="/proximo/" class="btn btn-outline-primary" aria-label="Próximo"><p>B</p></a>
  </nav>
  <script type="application/json" id="page-data">__PAYLOAD__</script>
</body>
</html>
"""


def post_html(payload=POST_PAYLOAD) -> str:
    """Post page markup with ``payload`` embedded (a dict, raw string or None)."""
    if payload is None:
        return POST_TEMPLATE.replace(
            '  <script type="application/json" id="page-data">__PAYLOAD__</script>\n', ''
        )
    raw = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    return POST_TEMPLATE.replace('__PAYLOAD__', raw)


@pytest.fixture(autouse=True)
def fresh_config():
    """Keep the module-level configuration from leaking between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def codes():
    return LocaleCodes()


@pytest.fixture
def route_map():
    return RouteMap.load()


@pytest.fixture
def dictionaries(route_map):
    return load_dictionaries(route_map=route_map)


@pytest.fixture
def home_document():
    return PageDocument(HOME_HTML, path="/")


@pytest.fixture
def post_document():
    return PageDocument(post_html(), path="/exemplo-traducao-post/")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def make_controller(config, route_map, dictionaries, storage):
    """Build a controller for a document, sharing one storage across calls."""

    def factory(document, store_backend=None):
        codes = LocaleCodes.from_config(config.locale)
        return ToggleController(
            document=document,
            store=LocaleStore(store_backend or storage, codes=codes,
                              key=config.locale.storage_key),
            resolver=LocaleResolver.from_config(config.locale),
            route_map=route_map,
            engine=DomTranslationEngine(document, dictionaries),
            config=config,
        )

    return factory
