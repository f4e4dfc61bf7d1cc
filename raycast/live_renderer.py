import arcade
from .renderer_models import RenderState

# --- Theme Colors ---
BACKGROUND_COLOR = arcade.color.BLACK
WALL_COLOR = arcade.color.WHITE
EMITTER_COLOR = arcade.color.AERO_BLUE

# --- Ray Colors ---
RAY_HIT_COLOR = arcade.color.YELLOW
RAY_INTERSECTION_MARKER_COLOR = arcade.color.GREEN


class SimulationWindow(arcade.Window):
    """
    Renders a scene snapshot using Arcade.

    World coordinates have their origin at the top-left corner with y
    pointing down, so y is flipped on the way in and out of the window.
    """

    def __init__(
        self,
        window_width: int = 600,
        window_height: int = 600,
        target_fps: int = 60,
        title: str = "Ray Casting",
    ):
        super().__init__(window_width, window_height, title)
        arcade.set_background_color(BACKGROUND_COLOR)
        self.current_state = None
        self.cursor_pos = (window_width / 2, window_height / 2)

        self.target_fps = target_fps
        self.set_update_rate(1 / target_fps)

    def on_mouse_motion(self, x, y, dx, dy):
        self.cursor_pos = (x, self.height - y)

    def to_screen(self, x: float, y: float):
        return x, self.height - y

    def render(self, state: RenderState):
        """
        Receives a new state and schedules a redraw.
        """
        self.current_state = state
        self.on_draw()

    def on_draw(self):
        self.clear()

        if not self.current_state:
            return

        # --- Draw Walls ---
        for segment in self.current_state.segments:
            ax, ay = self.to_screen(segment.a.x, segment.a.y)
            bx, by = self.to_screen(segment.b.x, segment.b.y)
            arcade.draw_line(ax, ay, bx, by, WALL_COLOR, 1)

        # --- Draw Rays ---
        emitter = self.current_state.emitter
        start_x, start_y = self.to_screen(emitter.position.x, emitter.position.y)

        for hit in emitter.hits:
            # Rays that strike nothing are not drawn
            if hit is None:
                continue
            end_x, end_y = self.to_screen(hit.x, hit.y)
            arcade.draw_line(start_x, start_y, end_x, end_y, RAY_HIT_COLOR, 1)
            arcade.draw_circle_filled(end_x, end_y, 2, RAY_INTERSECTION_MARKER_COLOR)

        arcade.draw_circle_filled(start_x, start_y, 4, EMITTER_COLOR)
