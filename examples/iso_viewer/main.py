# examples/iso_viewer/main.py

import sys
import os
import json
import argparse
import logging
import logging.config
import pygame
import pygame_gui

# To import from the repository root, we add it to the Python path.
# This is necessary because 'examples' is not in the same package as 'map_generator'.
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from map_generator.runtime import GameState
from map_generator.runtime.units import UnitAction
from renderer import IsoRenderer
from camera import IsoCamera
from hud import describe_tile

# --- UI Constants ---
UI_PANEL_WIDTH = 280
UI_ELEMENT_HEIGHT = 25
UI_PADDING = 10
UI_BUTTON_HEIGHT = 40

ACTION_LABELS = {
    UnitAction.FOUND_CITY: "Found City",
    UnitAction.ATTACK: "Attack",
}


class Application:
    """The main application class for the isometric viewer."""

    def __init__(self, seed_token=None):
        self._setup_logging()
        self.logger.info("Application starting.")

        self.config = self._load_config()
        self._setup_pygame()

        # --- Interaction State (presentation only, never seen by the game) ---
        self.hover_tile = None
        self.selected_unit = None
        self.attack_mode = False

        # --- Dependency Injection ---
        generation_config = self.config.get('map_generation_parameters', {})
        if seed_token is None:
            seed_token = generation_config.get('seed')
        self.game = GameState.from_seed(
            seed_token=None if seed_token is None else str(seed_token),
            config=generation_config,
            logger=self.logger,
        )
        self.camera = IsoCamera(self.config)
        self.renderer = IsoRenderer(logger=self.logger)

        # --- UI Setup ---
        self.ui_manager = None
        self.ui_panel = None
        self.turn_label = None
        self.player_label = None
        self.tile_label = None
        self.unit_label = None
        self.moves_label = None
        self.end_turn_button = None
        self.action_buttons = {}
        self._setup_ui()
        self._refresh_labels()

        self.is_running = True

    def _setup_logging(self):
        """Initializes the logging system from a config file."""
        log_config_path = 'examples/iso_viewer/logging_config.json'
        log_dir = 'logs'

        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        with open(log_config_path, 'rt') as f:
            log_config = json.load(f)

        # Tell the logger where to create its file, overriding the JSON path.
        log_config['handlers']['file']['filename'] = os.path.join(log_dir, 'iso_viewer.log')

        logging.config.dictConfig(log_config)
        self.logger = logging.getLogger(__name__)

    def _load_config(self) -> dict:
        """Loads viewer and generation parameters from the config file."""
        config_path = 'examples/iso_viewer/config.json'
        self.logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_path, 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            self.logger.critical(f"Configuration file not found at {config_path}. Exiting.")
            sys.exit(1)
        except json.JSONDecodeError:
            self.logger.critical(f"Error decoding JSON from {config_path}. Exiting.")
            sys.exit(1)

    def _setup_pygame(self):
        """Initializes Pygame and the display window."""
        pygame.init()
        display_config = self.config['display']
        self.screen_width = display_config['screen_width']
        self.screen_height = display_config['screen_height']

        self.logger.info(f"Initializing display in Windowed mode ({self.screen_width}x{self.screen_height}).")
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))

        pygame.display.set_caption("Isometric 4X")
        self.clock = pygame.time.Clock()
        self.tick_rate = display_config['clock_tick_rate']
        self.logger.info("Pygame initialized successfully.")

    def _setup_ui(self):
        """Initializes the pygame_gui manager and creates the side panel."""
        self.ui_manager = pygame_gui.UIManager((self.screen_width, self.screen_height))

        panel_rect = pygame.Rect(
            self.screen_width - UI_PANEL_WIDTH, 0,
            UI_PANEL_WIDTH, self.screen_height
        )
        self.ui_panel = pygame_gui.elements.UIPanel(
            relative_rect=panel_rect,
            manager=self.ui_manager,
            starting_height=1
        )

        current_y = UI_PADDING
        element_width = UI_PANEL_WIDTH - (3 * UI_PADDING)

        def add_label(text):
            nonlocal current_y
            label = pygame_gui.elements.UILabel(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_ELEMENT_HEIGHT),
                text=text,
                manager=self.ui_manager,
                container=self.ui_panel
            )
            current_y += UI_ELEMENT_HEIGHT
            return label

        def add_button(text):
            nonlocal current_y
            button = pygame_gui.elements.UIButton(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_BUTTON_HEIGHT),
                text=text,
                manager=self.ui_manager,
                container=self.ui_panel
            )
            current_y += UI_BUTTON_HEIGHT + UI_PADDING
            return button

        self.turn_label = add_label("Turn")
        self.player_label = add_label("Player")
        current_y += UI_PADDING
        self.tile_label = add_label("Tile: -")
        current_y += UI_PADDING
        self.unit_label = add_label("Unit: -")
        self.moves_label = add_label("Moves: -")
        current_y += UI_PADDING

        for action, text in ACTION_LABELS.items():
            self.action_buttons[action] = add_button(text)

        current_y += UI_PADDING
        self.end_turn_button = add_button("End Turn")

        self.logger.info("UI Manager initialized.")

    def _refresh_labels(self):
        self.turn_label.set_text(f"Turn {self.game.turn}")
        self.player_label.set_text(self.game.current_player.name)

        self.tile_label.set_text(describe_tile(self.hover_tile, self.game.current_player.player_id))

        unit = self.selected_unit
        if unit is None:
            self.unit_label.set_text("Unit: -")
            self.moves_label.set_text("Moves: -")
        else:
            self.unit_label.set_text(f"{unit.unit_type.display_name} at {unit.position}")
            self.moves_label.set_text(f"Moves: {unit.moves}/{unit.max_moves}")

        for action, button in self.action_buttons.items():
            if unit is not None and action in unit.unit_type.actions:
                button.enable()
            else:
                button.disable()

    def run(self):
        """The main application loop."""
        self.logger.info("Entering main loop.")
        try:
            while self.is_running:
                time_delta = self.clock.tick(self.tick_rate) / 1000.0

                self._handle_events()
                self._handle_panning()

                self.renderer.draw(
                    self.screen, self.camera, self.game,
                    viewer_player_id=self.game.current_player.player_id,
                    hover=self.hover_tile,
                    selected=self.selected_unit,
                    attack_mode=self.attack_mode,
                )

                self.ui_manager.update(time_delta)
                self.ui_manager.draw_ui(self.screen)
                pygame.display.flip()

        except Exception:
            self.logger.critical("An unhandled exception occurred!", exc_info=True)
        finally:
            self.logger.info("Exiting application.")
            pygame.quit()
            sys.exit()

    def _handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            # Pass events to the UI Manager first
            self.ui_manager.process_events(event)

            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                if self.attack_mode:
                    self.attack_mode = False
                else:
                    self.logger.info("Event: ESC key pressed. Exiting.")
                    self.is_running = False

            if event.type == pygame_gui.UI_BUTTON_PRESSED:
                if event.ui_element == self.end_turn_button:
                    self._end_turn()
                elif event.ui_element == self.action_buttons[UnitAction.FOUND_CITY]:
                    self._found_city()
                elif event.ui_element == self.action_buttons[UnitAction.ATTACK]:
                    self.attack_mode = True
                    self.logger.debug("Event: attack mode, waiting for a target.")

            if event.type == pygame.MOUSEMOTION:
                self._update_hover(event.pos)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if event.pos[0] < self.screen_width - UI_PANEL_WIDTH:
                    self._handle_map_click(event.pos)

        self._refresh_labels()

    def _handle_panning(self):
        """Arrow keys, WASD (QWERTY) and ZQSD (AZERTY) move the map."""
        keys = pygame.key.get_pressed()
        pan_speed = self.config['camera']['pan_speed_pixels']
        if keys[pygame.K_UP] or keys[pygame.K_w] or keys[pygame.K_z]:
            self.camera.pan(0, pan_speed)
        if keys[pygame.K_DOWN] or keys[pygame.K_s]:
            self.camera.pan(0, -pan_speed)
        if keys[pygame.K_LEFT] or keys[pygame.K_a] or keys[pygame.K_q]:
            self.camera.pan(pan_speed, 0)
        if keys[pygame.K_RIGHT] or keys[pygame.K_d]:
            self.camera.pan(-pan_speed, 0)

    def _tile_at_screen(self, pos):
        if pos[0] >= self.screen_width - UI_PANEL_WIDTH:
            return None
        return self.game.get_tile(*self.camera.screen_to_iso(*pos))

    def _update_hover(self, pos):
        self.hover_tile = self._tile_at_screen(pos)

    def _handle_map_click(self, pos):
        tile = self._tile_at_screen(pos)
        if tile is None:
            return

        unit_at_tile = self.game.get_unit_at(tile.x, tile.y)

        # 1. A pending attack consumes the click, hit or miss.
        if self.attack_mode:
            self.attack_mode = False
            if self.selected_unit is not None:
                self.game.attack(self.selected_unit, tile.x, tile.y)
            return

        # 2. Clicking one of our own units selects it.
        if unit_at_tile is not None and unit_at_tile.owner == self.game.current_player.player_id:
            self.selected_unit = unit_at_tile
            self.logger.debug(f"Event: selected {unit_at_tile!r}")
            return

        # 3. Otherwise try to move the selection there.
        if self.selected_unit is not None:
            self.game.try_move(self.selected_unit, tile.x, tile.y)

    def _found_city(self):
        if self.selected_unit is not None and self.game.build_city(self.selected_unit):
            self.selected_unit = None

    def _end_turn(self):
        self.game.end_turn()
        self.selected_unit = None
        self.attack_mode = False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Isometric 4X map viewer.")
    parser.add_argument("--seed", default=None, help="Seed token: a number or any text.")
    return parser.parse_args(argv)


if __name__ == '__main__':
    args = parse_args()
    app = Application(seed_token=args.seed)
    app.run()
