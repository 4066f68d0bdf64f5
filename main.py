from vault import Session
from controls import KeyboardController
from settings import load_settings
from viewport import Viewport
from visualization import Visualization
import pygame
from OpenGL.GLU import gluOrtho2D

def main():
	settings = load_settings()

	pygame.init()
	pygame.display.set_caption(settings.caption)
	pygame.display.set_mode((settings.window_width, settings.window_height), pygame.OPENGL | pygame.DOUBLEBUF)
	gluOrtho2D(0, settings.window_width, settings.window_height, 0)
	pygame.key.set_repeat(300, 60)
	clock = pygame.time.Clock()

	session = Session(history_capacity=settings.history_capacity, max_route_length=settings.max_route_length)
	viewport = Viewport(
		room_area=settings.room_area,
		scale=settings.scale,
		min_scale=settings.min_scale,
		max_scale=settings.max_scale,
		easing=settings.view_easing
	)
	controls = KeyboardController(session, viewport)
	vis = Visualization(session, viewport, settings)

	print("Pick the direction you left the portal by (arrow keys). F1 for help.")

	redraw = True
	while controls.running:
		# Block while idle; keep ticking only while the view is still scrolling
		if redraw:
			events = pygame.event.get()
		else:
			events = [pygame.event.wait()] + pygame.event.get()

		for event in events:
			if controls.handle_event(event):
				redraw = True

		if viewport.update():
			redraw = True
		elif not redraw:
			continue

		vis.render()
		pygame.display.flip()
		redraw = viewport.position != viewport.target
		clock.tick(settings.fps)

	pygame.quit()

if __name__ == "__main__":
	main()
