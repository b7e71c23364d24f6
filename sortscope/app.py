import argparse
import logging
import math
import sys
import threading

import numpy as np
import pygame

from sortscope.bucket import Bucket
from sortscope.dataset import InputParseError, parse_values, random_values
from sortscope.engines import ALGORITHMS, ApplicabilityError
from sortscope.events import Highlight, StepKind
from sortscope.radix import PassColumn
from sortscope.session import Outcome, Session
from sortscope.settings import (FPS, SPEED_MAX, SPEED_MIN, WINDOW_HEIGHT, WINDOW_WIDTH,
                                load_settings, SETTINGS_JSON)

logger = logging.getLogger(__name__)

# ============================================================
# ========================= UI THEME =========================
# ============================================================

ACTIVE_COLOR     = (255, 60, 60)
BAR_SPACING      = 1

UI_BG         = (8,   8,  14)
UI_PANEL      = (14, 14,  22)
UI_PANEL2     = (22, 22,  36)
UI_ACCENT     = (255, 55,  55)
UI_TEXT       = (215, 215, 228)
UI_SUBTEXT    = (105, 105, 130)
UI_HOVER      = (30,  22,  38)
UI_SEL_BG     = (50,  12,  12)
UI_BORDER     = (38,  38,  58)
UI_SEL_BORDER = (255, 55,  55)
UI_DIM        = (60,  60,  80)
UI_GREEN      = (60, 200, 100)

HIGHLIGHT_COLORS = {
    Highlight.PRIMARY:   ACTIVE_COLOR,
    Highlight.SECONDARY: UI_GREEN,
    Highlight.CONSUMED:  UI_DIM,
}

PAD      = 16
BTN_W    = 180
BTN_H    = 34
TOP_H    = 118
BARS_H   = 250
AUX_Y    = TOP_H + BARS_H + 12
AUX_H    = WINDOW_HEIGHT - AUX_Y - 72
EXPLAIN_Y = WINDOW_HEIGHT - 62

INPUT_CHARS = set("0123456789.,")
# digit keys feed the value box, so algorithm selection uses F1..F3
SELECT_KEYS = [pygame.K_F1, pygame.K_F2, pygame.K_F3]

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================

def value_to_color(value, max_value):
    r = value / max_value if max_value else 0.0
    if r < 0.25: return (0, int(255 * r * 4), 255)
    if r < 0.5:  return (0, 255, int(255 * (1 - (r - 0.25) * 4)))
    if r < 0.75: return (int(255 * (r - 0.5) * 4), 255, 0)
    return (255, int(255 * (1 - (r - 0.75) * 4)), 0)


def digit_color(digit):
    c = pygame.Color(0)
    c.hsla = (digit * 36 % 360, 70, 50, 100)
    return c


def bar_geometry(values, rect, max_value):
    """Left edge, width and height of every bar; short values keep 5% height."""
    v = np.asarray(values, dtype=np.float64)
    n = max(1, len(v))
    bw = rect.width / n
    xs = rect.x + np.arange(len(v)) * bw
    top = max_value if max_value > 0 else 1.0
    hs = np.maximum(v / top * rect.height, rect.height * 0.05)
    return xs, bw, hs


def draw_bars(s, fonts, rect, values, highlights, digits=None):
    if not values:
        return
    mx = max(values)
    xs, bw, hs = bar_geometry(values, rect, mx)
    show_text = bw >= 18
    for i, v in enumerate(values):
        h = float(hs[i])
        if i in highlights:
            c = HIGHLIGHT_COLORS[highlights[i]]
        elif digits is not None:
            c = digit_color(digits[i])
        else:
            c = value_to_color(v, mx)
        bar = pygame.Rect(int(xs[i]), int(rect.bottom - h), max(1, int(bw) - BAR_SPACING), int(h))
        pygame.draw.rect(s, c, bar)
        if show_text:
            label = str(digits[i]) if digits is not None else f"{v:g}"
            t = fonts['mono_sm'].render(label, True, UI_TEXT)
            s.blit(t, t.get_rect(midbottom=(bar.centerx, bar.top - 2)))


def draw_counts(s, fonts, rect, counts, focus):
    n = len(counts)
    cols = max(1, min(n, 25))
    cw = max(10, rect.width // cols)
    ch = 30
    for i, c in enumerate(counts):
        x = rect.x + (i % cols) * cw
        y = rect.y + (i // cols) * (ch + 4)
        if y + ch > rect.bottom:
            break
        cell = pygame.Rect(x, y, cw - 3, ch)
        bg = UI_SEL_BG if i == focus else UI_PANEL2
        pygame.draw.rect(s, bg, cell, border_radius=3)
        pygame.draw.rect(s, UI_SEL_BORDER if i == focus else UI_BORDER, cell, 1, border_radius=3)
        s.blit(fonts['mono_sm'].render(str(i), True, UI_SUBTEXT), (x + 3, y + 2))
        s.blit(fonts['small'].render(str(c), True, UI_TEXT), (x + 3, y + 14))


def draw_buckets(s, fonts, rect, buckets, focus):
    bw = rect.width / max(1, len(buckets))
    for b in buckets:
        box = pygame.Rect(int(rect.x + b.index * bw), rect.y, int(bw) - 4, rect.height)
        pygame.draw.rect(s, UI_SEL_BG if b.index == focus else UI_PANEL, box, border_radius=4)
        pygame.draw.rect(s, UI_BORDER, box, 1, border_radius=4)
        s.blit(fonts['mono_sm'].render(b.label, True, UI_SUBTEXT), (box.x + 3, box.y + 3))
        s.blit(fonts['mono_sm'].render(f"({len(b.items)})", True, UI_SUBTEXT),
               (box.x + 3, box.y + 16))
        for j, v in enumerate(b.items):
            y = box.y + 32 + j * 16
            if y + 14 > box.bottom:
                break
            s.blit(fonts['small'].render(f"{v:g}", True, UI_TEXT), (box.x + 6, y))


def draw_columns(s, fonts, rect, columns, focus):
    cw = 120
    for k, col in enumerate(columns):
        x = rect.x + k * cw
        if x + cw > rect.right:
            break
        tc = UI_ACCENT if k == focus else UI_SUBTEXT
        s.blit(fonts['small'].render(col.label, True, tc), (x, rect.y))
        for j, cell in enumerate(col.cells()):
            y = rect.y + 18 + j * 14
            if y + 12 > rect.bottom:
                break
            s.blit(fonts['mono_sm'].render(cell, True, UI_TEXT), (x, y))


def draw_aux(s, fonts, rect, aux, focus):
    if not aux:
        return
    first = aux[0]
    if isinstance(first, Bucket):
        draw_buckets(s, fonts, rect, aux, focus)
    elif isinstance(first, PassColumn):
        draw_columns(s, fonts, rect, aux, focus)
    else:
        draw_counts(s, fonts, rect, aux, focus)

# ============================================================
# ========================= UI WIDGETS =======================
# ============================================================

class Slider:
    """Single-knob slider with snapping."""
    KNOB_RADIUS = 6

    def __init__(self, x, y, w, lo, hi, val, label, snap=None):
        self.x, self.y, self.w = x, y, w
        self.lo, self.hi = lo, hi
        self.value = val
        self.label = label
        self.drag = False
        self.snap = snap
        self.track = pygame.Rect(x, y+18, w, 4)
        self.hit = pygame.Rect(x-5, y, w+10, 38)

    def _r(self):
        return (self.value - self.lo) / (self.hi - self.lo)

    def _kx(self):
        return int(self.x + self._r() * self.w)

    def handle(self, ev):
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if math.hypot(ev.pos[0]-self._kx(), ev.pos[1]-self.track.centery) < 14 \
               or self.hit.collidepoint(ev.pos):
                self.drag = True; self._set(ev.pos[0])
        elif ev.type == pygame.MOUSEBUTTONUP:
            self.drag = False
        elif ev.type == pygame.MOUSEMOTION and self.drag:
            self._set(ev.pos[0])

    def _set(self, mx):
        r = max(0.0, min(1.0, (mx - self.x) / self.w))
        raw = self.lo + r * (self.hi - self.lo)
        if self.snap: raw = round(raw / self.snap) * self.snap
        self.value = max(self.lo, round(raw * 4) / 4)

    def draw(self, s, fonts):
        s.blit(fonts['small'].render(f"{self.label}:  {self.value:.2f}x", True, UI_SUBTEXT),
               (self.x, self.y))
        pygame.draw.rect(s, UI_BORDER, self.track, border_radius=2)
        fw = int(self._r() * self.w)
        if fw > 0: pygame.draw.rect(s, UI_ACCENT, (self.x, self.track.y, fw, 4), border_radius=2)
        kx, ky = self._kx(), self.track.centery
        pygame.draw.circle(s, UI_PANEL2, (kx, ky), self.KNOB_RADIUS)
        pygame.draw.circle(s, UI_ACCENT, (kx, ky), self.KNOB_RADIUS, 2)
        pygame.draw.circle(s, UI_ACCENT, (kx, ky), 2)


class SmBtn:
    def __init__(self, x, y, w, h, lbl):
        self.rect = pygame.Rect(x, y, w, h); self.label = lbl
    def draw(self, s, fonts, act=False, hov=False):
        bg = UI_ACCENT if act else (UI_HOVER if hov else UI_PANEL2)
        fc = (0, 0, 0) if act else UI_TEXT
        pygame.draw.rect(s, bg,        self.rect, border_radius=5)
        pygame.draw.rect(s, UI_BORDER, self.rect, 1, border_radius=5)
        t = fonts['small'].render(self.label, True, fc)
        s.blit(t, t.get_rect(center=self.rect.center))

# ============================================================
# ========================= VIEW =============================
# ============================================================

class View:
    """
    Latest frame reported by the engine thread. on_step / on_status run on
    that thread; the pygame loop reads under the same lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.values = []
        self.highlights = {}
        self.digits = None
        self.aux = ()
        self.aux_index = None
        self.status = ""

    def on_step(self, event):
        with self._lock:
            self.values = list(event.snapshot)
            self.highlights = dict(event.highlights)
            self.digits = event.values if event.kind is StepKind.DIGIT_FOCUS else None
            if event.aux:
                self.aux = event.aux
            self.aux_index = event.aux_index

    def on_status(self, text):
        with self._lock:
            self.status = text

    def reset(self, values):
        with self._lock:
            self.values = list(values)
            self.highlights = {}
            self.digits = None
            self.aux = ()
            self.aux_index = None

    def frame(self):
        with self._lock:
            return (list(self.values), dict(self.highlights), self.digits,
                    self.aux, self.aux_index, self.status)


class App:
    def __init__(self, screen, fonts, settings, initial=None):
        self.screen = screen
        self.fonts = fonts
        self.settings = settings
        self.view = View()
        self.sel = 0
        self.text = ""
        self.msg = ""
        self.msg_ok = True

        self.sl_speed = Slider(WINDOW_WIDTH - PAD - 260, 20, 260, SPEED_MIN, SPEED_MAX,
                               settings.speed, "Speed")
        self.session = Session(settings, on_step=self.view.on_step,
                               on_status=self.view.on_status,
                               get_speed=lambda: self.sl_speed.value)

        self.algo_btns = [SmBtn(PAD + i * (BTN_W + 6), 20, BTN_W, BTN_H, nm)
                          for i, (nm, _) in enumerate(ALGORITHMS)]
        y2 = 20 + BTN_H + 10
        self.input_rect = pygame.Rect(PAD, y2, 420, BTN_H)
        self.load_btn   = SmBtn(PAD + 430, y2, 90, BTN_H, "Load")
        self.random_btn = SmBtn(PAD + 526, y2, 110, BTN_H, "Random Array")
        self.start_btn  = SmBtn(PAD + 642, y2, 90, BTN_H, "Start")
        self.pause_btn  = SmBtn(PAD + 738, y2, 90, BTN_H, "Pause")

        if initial is not None:
            self.load(initial)
        else:
            self.load_random()

    # ---------------- actions ----------------

    def _notify(self, msg, ok=True):
        self.msg = msg; self.msg_ok = ok

    def load(self, values):
        self.session.load_dataset(values)
        self.view.reset(self.session.dataset.values)
        self._notify("")

    def load_random(self):
        self.load(random_values(self.settings.random_size, self.settings.random_max))

    def load_text(self):
        try:
            self.load(parse_values(self.text))
        except InputParseError as e:
            self._notify(str(e), ok=False)

    def select(self, i):
        """Algorithm choice is locked while a run is in progress."""
        if not self.session.controller.running:
            self.sel = i

    def start(self):
        _, key = ALGORITHMS[self.sel]
        try:
            self.session.start_run(key)
        except ApplicabilityError as e:
            self.view.on_status(str(e))
            return
        self._notify("")

    def handle(self, ev):
        self.sl_speed.handle(ev)
        if ev.type == pygame.TEXTINPUT:
            self.text += "".join(ch for ch in ev.text if ch in INPUT_CHARS)
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_BACKSPACE: self.text = self.text[:-1]
            elif ev.key == pygame.K_RETURN:  self.load_text()
            elif ev.key == pygame.K_SPACE:   self.start()
            elif ev.key == pygame.K_p:       self.session.toggle_pause()
            elif ev.key == pygame.K_r:       self.load_random()
            elif ev.key == pygame.K_TAB:     self.select((self.sel + 1) % len(ALGORITHMS))
            elif ev.key in SELECT_KEYS:      self.select(SELECT_KEYS.index(ev.key))
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for i, b in enumerate(self.algo_btns):
                if b.rect.collidepoint(ev.pos):
                    self.select(i)
            if self.load_btn.rect.collidepoint(ev.pos):   self.load_text()
            if self.random_btn.rect.collidepoint(ev.pos): self.load_random()
            if self.start_btn.rect.collidepoint(ev.pos):  self.start()
            if self.pause_btn.rect.collidepoint(ev.pos):  self.session.toggle_pause()

    # ---------------- drawing ----------------

    def draw(self):
        s, fonts = self.screen, self.fonts
        mp = pygame.mouse.get_pos()
        s.fill(UI_BG)
        state = self.session.controller.state()

        for i, b in enumerate(self.algo_btns):
            b.draw(s, fonts, i == self.sel, b.rect.collidepoint(mp))
        self.sl_speed.draw(s, fonts)

        pygame.draw.rect(s, UI_PANEL, self.input_rect, border_radius=5)
        pygame.draw.rect(s, UI_BORDER, self.input_rect, 1, border_radius=5)
        shown = self.text or "e.g. 29.5, 3.2, 71"
        s.blit(fonts['mid'].render(shown, True, UI_TEXT if self.text else UI_DIM),
               (self.input_rect.x + 8, self.input_rect.y + 8))
        for b in (self.load_btn, self.random_btn, self.start_btn):
            b.draw(s, fonts, False, b.rect.collidepoint(mp))
        self.pause_btn.label = "Resume" if state.paused else "Pause"
        self.pause_btn.draw(s, fonts, state.paused, self.pause_btn.rect.collidepoint(mp))

        if self.msg:
            col = UI_GREEN if self.msg_ok else (255, 90, 90)
            s.blit(fonts['small'].render(self.msg, True, col), (PAD, TOP_H - 14))

        values, highlights, digits, aux, focus, status = self.view.frame()
        bars = pygame.Rect(PAD, TOP_H + 10, WINDOW_WIDTH - 2 * PAD, BARS_H - 20)
        draw_bars(s, fonts, bars, values, highlights, digits)

        aux_rect = pygame.Rect(PAD, AUX_Y, WINDOW_WIDTH - 2 * PAD, AUX_H)
        pygame.draw.rect(s, UI_PANEL, aux_rect.inflate(8, 8), border_radius=6)
        draw_aux(s, fonts, aux_rect, aux, focus)

        box = pygame.Rect(PAD, EXPLAIN_Y, WINDOW_WIDTH - 2 * PAD, 48)
        pygame.draw.rect(s, UI_PANEL2, box, border_radius=6)
        s.blit(fonts['mid'].render(status, True, UI_TEXT), (box.x + 10, box.y + 14))

        pygame.display.flip()

# ============================================================
# ========================= MAIN =============================
# ============================================================

def build_fonts():
    def tf(names, sz):
        for n in names:
            try: return pygame.font.SysFont(n, sz)
            except Exception: pass
        return pygame.font.SysFont(None, sz)
    mono = ["Consolas", "Courier New", "Lucida Console"]
    sans = ["Segoe UI", "Tahoma", "Arial"]
    return dict(mid=tf(sans, 17), small=tf(sans, 13), mono_sm=tf(mono, 12))


def run_headless(settings, key, values, out=None) -> int:
    """Run one algorithm without a window, printing every status line."""
    out = out or sys.stdout
    session = Session(settings, on_status=lambda text: print(text, file=out))
    try:
        session.load_dataset(values)
        outcome = session.run(key)
    except (InputParseError, ApplicabilityError) as e:
        print(e, file=out)
        return 2
    print(" ".join(f"{v:g}" for v in session.dataset.values), file=out)
    return 0 if outcome is Outcome.COMPLETED else 1


def run_window(settings, key=None, values=None):
    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("SortScope")
    pygame.key.start_text_input()
    app = App(screen, build_fonts(), settings, values)
    if key is not None:
        app.sel = [k for _, k in ALGORITHMS].index(key)
    clock = pygame.time.Clock()
    try:
        while True:
            clock.tick(FPS)
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT or (ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE):
                    return
                app.handle(ev)
            app.draw()
    finally:
        app.session.cancel_run()
        pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Step-by-step counting, bucket and radix sort")
    parser.add_argument("--algorithm", choices=[k for _, k in ALGORITHMS], default=None,
                        help="Algorithm to select (required with --headless).")
    parser.add_argument("--values", default=None,
                        help="Comma-separated non-negative numbers; random if omitted.")
    parser.add_argument("--speed", type=float, default=None, help="Playback speed multiplier.")
    parser.add_argument("--settings", default=SETTINGS_JSON, help="JSON settings override file.")
    parser.add_argument("--headless", action="store_true", help="Print steps instead of opening a window.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level name.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings(args.settings)
    if args.speed is not None:
        settings = settings.with_speed(args.speed)
    logger.debug("Using %s", settings)

    try:
        values = parse_values(args.values) if args.values else None
    except InputParseError as e:
        print(e, file=sys.stderr)
        return 2

    if args.headless:
        if args.algorithm is None:
            print("--headless needs --algorithm", file=sys.stderr)
            return 2
        if values is None:
            values = random_values(settings.random_size, settings.random_max)
        return run_headless(settings, args.algorithm, values)

    run_window(settings, args.algorithm, values)
    return 0


if __name__ == "__main__":
    sys.exit(main())
