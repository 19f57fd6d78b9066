# app.py
# -*- coding: utf-8 -*-

"""
Aussprache-Spiel (Streamlit)

Datensatz: <data_root>/<dataset>.csv, Auswahl per URL-Parameter ?dataset=...
(Standard: dataset01, siehe config.json)

CSV-Aufbau:
- Zeile 1: Kategorien (höchstens 26 Spalten)
- darunter: Wörter, Spalten dürfen unterschiedlich lang sein
- Trennzeichen , ; Tab oder | werden automatisch erkannt

Spielablauf:
- Wort im Pool wählen, dann Zielzelle tippen (belegte Zelle => altes Wort zurück in den Pool)
- Zelle ohne Auswahl tippen => Wort zurück in den Pool
- "Abgeben" erst, wenn alle Wörter liegen; danach Punktzahl, ✅/❌ und Aussprache pro Wort
- Audio: title_<a..z>.mp3 und word_<a..z><n>.mp3 unter den Audio-Wurzeln
"""

import time
import uuid
from dataclasses import replace

import streamlit as st

from aussprache.audio import exists
from aussprache.config import (GRADING_POLICIES, PLACEMENT_POLICIES, GameConfig,
                               dataset_location, load_config, save_config)
from aussprache.errors import ConfigError, FormatError, LoadError
from aussprache.loader import load_table
from aussprache.logging_config import setup_logging
from aussprache.placement import PlaceOutcome
from aussprache.session import GameSession

# Seite konfigurieren (früh)
st.set_page_config(page_title="Aussprache-Spiel", page_icon="🔊", layout="wide")

try:
    CONFIG = load_config()
    CONFIG_PROBLEM = None
except ConfigError as e:
    CONFIG = GameConfig()
    CONFIG_PROBLEM = str(e)
setup_logging(CONFIG.log_level)

# ============================ Utilities ============================

def fmt_ms(ms: int) -> str:
    if ms < 0:
        ms = 0
    tenths = (ms % 1000) // 100
    s = (ms // 1000) % 60
    m = (ms // 1000) // 60
    return f"{m:02d}:{s:02d}.{tenths}"

# ============================ Laden (gecacht) ============================

@st.cache_data(show_spinner=False)
def cached_table(location: str, timeout: float) -> list[list[str]]:
    return load_table(location, timeout=timeout)

@st.cache_data(show_spinner=False, ttl=600)
def cached_exists(location: str) -> bool:
    return exists(location, timeout=CONFIG.http_timeout)

def new_session(name: str) -> GameSession:
    location = dataset_location(CONFIG, name)
    table = cached_table(location, CONFIG.http_timeout)
    return GameSession.from_table(table, name, CONFIG, location=location, probe=cached_exists)

def start_round(name: str):
    """Alte Runde verwerfen und komplett neu aufbauen."""
    st.session_state.game = new_session(name)
    st.session_state.game_key = uuid.uuid4().hex[:8]
    st.session_state.selected_tile = None
    st.session_state.flash = None
    st.session_state.moves = 0

# ============================ Spielfeld ============================

def render_titles(game: GameSession):
    ds = game.dataset
    cols = st.columns(ds.num_columns)
    for c, col in enumerate(cols):
        with col:
            st.markdown(f"#### {ds.title(c)}")
            src = game.title_audio(c)
            if src:
                st.audio(src)

def render_grid(game: GameSession, key: str):
    ds = game.dataset
    selected = st.session_state.selected_tile
    for r in range(ds.layout.rows):
        cols = st.columns(ds.num_columns)
        for c, col in enumerate(cols):
            with col:
                tile = game.board.occupant((r, c))
                label = tile.text if tile else "·"
                if game.submitted:
                    ok = game.is_cell_correct((r, c))
                    mark = "" if ok is None else (" ✅" if ok else " ❌")
                    st.button(f"{label}{mark}", key=f"{key}_cell_{r}_{c}", disabled=True,
                              use_container_width=True)
                    continue

                if st.button(label, key=f"{key}_cell_{r}_{c}", use_container_width=True):
                    if selected is not None:
                        outcome = game.place(selected, (r, c))
                        if outcome == PlaceOutcome.REJECTED:
                            st.session_state.flash = "Falsche Zelle – versuch es nochmal."
                        st.session_state.selected_tile = None
                    elif tile is not None:
                        game.to_pool(tile.id)
                    st.session_state.moves += 1
                    st.rerun()

def render_pool(game: GameSession, key: str):
    st.markdown("#### Wörter")
    pool = game.board.pool()
    if not pool:
        st.write("Alle Wörter liegen im Raster ✅")
        return

    labels = ["— bitte wählen —"] + [t.text for t in pool]
    ids = [None] + [t.id for t in pool]
    current = st.session_state.selected_tile
    index = ids.index(current) if current in ids else 0
    chosen = st.radio("Wähle ein Wort", labels, index=index, key=f"{key}_pool_{st.session_state.moves}",
                      horizontal=True)
    st.session_state.selected_tile = ids[labels.index(chosen)]
    if st.session_state.selected_tile is not None:
        st.info(f"Ausgewählt: **{chosen}** – jetzt eine Zelle tippen.")

def render_result(game: GameSession):
    res = game.result
    st.success(f"Ergebnis: {res.score} / {res.total} – Zeit: {fmt_ms(game.clock.elapsed_ms())}")
    st.subheader("Lösung")
    st.dataframe(res.to_frame(), use_container_width=True)

    st.subheader("Aussprache")
    for tile in sorted(game.tiles, key=lambda t: (t.source_column, t.ordinal)):
        src = game.tile_audio(tile.id)
        if not src:
            continue
        c1, c2 = st.columns([1, 3])
        with c1:
            st.write(("✅ " if res.tiles[tile.id] else "❌ ") + tile.text)
        with c2:
            st.audio(src)

# ============================ Einstellungen ============================

def settings_block():
    """Bewertung/Ablegen/Seed ändern und in config.json speichern."""
    with st.expander("⚙️ Einstellungen"):
        grading = st.selectbox("Bewertung", GRADING_POLICIES,
                               index=GRADING_POLICIES.index(CONFIG.grading_policy), key="cfg_grading")
        placement = st.selectbox("Ablegen", PLACEMENT_POLICIES,
                                 index=PLACEMENT_POLICIES.index(CONFIG.placement_policy), key="cfg_placement")
        seed = st.text_input("Seed (optional, für Reproduzierbarkeit)", value=CONFIG.seed, key="cfg_seed")
        st.caption("\"strict\" geht nur zusammen mit \"exact\".")
        if st.button("💾 Speichern", key="cfg_save"):
            try:
                save_config(replace(CONFIG, grading_policy=grading, placement_policy=placement, seed=seed))
            except ConfigError as e:
                st.error(str(e))
                return
            st.session_state.pop("game", None)
            st.rerun()

# ============================ Haupt-UI (Controller) ============================

def main():
    name = st.query_params.get("dataset") or CONFIG.default_dataset

    st.title("🔊 Aussprache-Spiel")
    st.caption(f"Datensatz: `{name}`")

    with st.sidebar:
        if st.button("🔁 Neu starten"):
            st.session_state.pop("game", None)
        if st.button("🧹 Cache leeren"):
            st.cache_data.clear()
            st.session_state.pop("game", None)

        if "dev_mode" not in st.session_state:
            st.session_state.dev_mode = False
        st.session_state.dev_mode = st.checkbox("Dev/Debug-Modus", value=st.session_state.dev_mode,
                                                key="dev_mode_cbox")

        settings_block()

    if CONFIG_PROBLEM:
        st.warning(f"config.json ignoriert: {CONFIG_PROBLEM}")

    game = st.session_state.get("game")
    if game is None or game.dataset.name != name:
        try:
            start_round(name)
        except LoadError as e:
            st.error(f"❌ **Datensatz konnte nicht geladen werden.** {e}")
            return
        except FormatError as e:
            st.error(f"❌ **Datensatz unbrauchbar.** {e}")
            return
        except ConfigError as e:
            st.error(f"❌ **Ungültiger Datensatzname.** {e}")
            return
        game = st.session_state.game

    key = st.session_state.game_key

    colT1, colT2, colT3 = st.columns([1.2, 1, 1])
    with colT1:
        st.metric("Time", fmt_ms(game.clock.elapsed_ms()))
    with colT2:
        st.metric("Placed", f"{game.placed_count} / {game.total}")
    with colT3:
        if st.button("Abgeben", key=f"{key}_submit", disabled=not game.ready):
            game.submit()
            st.rerun()

    if st.session_state.flash:
        st.warning(st.session_state.flash)
        st.session_state.flash = None

    render_titles(game)
    render_grid(game, key)

    if game.submitted:
        render_result(game)
    else:
        render_pool(game, key)

    if st.session_state.dev_mode:
        st.subheader("Debug Info")
        st.write(f"Quelle: `{dataset_location(CONFIG, name)}` – Raster {game.dataset.layout.rows}×{game.dataset.layout.cols}")
        st.dataframe(game.dataset.frame.head(5))
        st.caption(f"Stand: {time.strftime('%d.%m.%Y %H:%M:%S')}")

if __name__ == "__main__":
    main()
