# sudokuocr

A library for reading a sudoku grid from an image and solving it. It locates the grid in a binary edge image, cuts the grid into cells, recognises each cell's digit with a small feed-forward network, and solves the resulting puzzle.

## Installation

```
pip install .
```

## What is in the package

- `sudokuocr.pixels`: loads and saves images as numpy arrays with `load_image` and `save_image`. Provides `to_grayscale` (0.3 R + 0.59 G + 0.11 B), `gray_bounds` and `gray_average`.
- `sudokuocr.hough`: `hough_transform(binary)` counts votes from every pixel whose level is 255. `HoughSpace.for_size(width, height)` gives the distance and angle sampling that the transform uses.
- `sudokuocr.lines`: `find_lines(accumulator, width, height)` turns local vote maxima into segments. `line_equations(segments)` converts those segments into `Line` values. `average_lines(lines)` drops near-duplicate lines.
- `sudokuocr.rotation`: `rotate(image, angle)` rotates an image. `rotate_segment` and `rotate_segments` rotate segments. `automatic_rotation(accumulator, width, height)` estimates the dominant angle. `rotate_point` and `is_pixel_black` are helpers.
- `sudokuocr.geometry`: holds `Line` and the helpers `intersection_point`, `corner_points`, `dist`, `draw_line`, `draw_points`, `inside_coords`, `append_segment`, `clamp`, `create_array` and `degrees_to_rad`. It also has the corner pickers `top_left`, `bottom_left`, `top_right` and `bottom_right`.
- `sudokuocr.squares`: `detect_square(width, height, lines)` picks the four lines that form the largest acceptable square, and raises `NoSquareFound` when none fits. `sort_corners` returns the square's corners. `crop_square(image, lines, square)` cuts the square out of the image. `is_perpendicular` and `square_perimeter` are helpers.
- `sudokuocr.cut`: `cut_cells(image)` splits the grid into 81 binary cells of 28×28 pixels. `write_cells(image, path)` writes those cells one per line as `0,p1,...,p784`.
- `sudokuocr.matrix`: `sigmoid`, `sigmoid_prime`, `softmax`, `argmax`, `flatten`, `randomized` and `uniform_distribution`. Also `save_matrix` and `load_matrix`, which use a one-value-per-line text format.
- `sudokuocr.images`: `LabelledImage` and `parse_image_row`. `load_images(path, count, cycle)` reads rows of `label,pixels...`. `save_recognised_grid(path, digits)` writes recognised digits as a grid file.
- `sudokuocr.network`: `NeuralNetwork`, with one hidden layer and sigmoid activations. Its methods are:
  - `create` and `train`
  - `train_batch` and `predict`
  - `predict_image` and `accuracy`
  - `save` and `load`, which use a directory holding `descriptor`, `hidden` and `output`
  - `describe`
- `sudokuocr.recognition`: `train_network(dataset, network_dir, count, rng)` trains a 784–300–10 network and saves it. `recognise_digits(network, images)` classifies images. `recognise_grid(cells_path, network_dir, output_path)` reads 81 cell images and writes the recognised grid.
- `sudokuocr.solver`: `Board` computes the candidates left by the givens and fills cells that have only one candidate. `solve(cells)` returns the solved cells and raises `ValueError` when the grid has no solution. `solve_file(path)` writes the board to `<path>.result` and returns whether it was solved.
- `sudokuocr.grid_format`: reads and writes the grid text format.
- `sudokuocr.xor`: `XorNetwork` is a two-input network that can be trained on the XOR truth table and saved.

## Grid text format

A grid is 110 characters long. Digits are written as themselves and empty cells as `.`. Groups of three cells in a row are separated by a space, each row ends with a newline, and a blank line separates each band of three rows:

```
53. .7. ...
6.. 195 ...
.98 ... .6.

8.. .6. ..3
4.. 8.3 ..1
7.. .2. ..6

.6. ... 28.
... 419 ..5
... .8. .79
```

`parse_grid(text)` returns 81 integers, with 0 for an empty cell. It raises `GridSyntaxError`, which carries the offending `position`, when a separator or cell is out of place. `format_grid(cells)` does the reverse. `read_grid` and `write_grid` work on files. `render_grid` prints the cells as nine lines of numbers.

## Example

Solving a grid:

```python
from sudokuocr.grid_format import format_grid, read_grid
from sudokuocr.solver import solve

solved = solve(read_grid("puzzle.txt"))
print(format_grid(solved))
```

Going from a binary edge image (pixels at 255 are edges) to a solved grid file:

```python
from sudokuocr.pixels import load_image
from sudokuocr.hough import hough_transform
from sudokuocr.lines import find_lines, line_equations, average_lines
from sudokuocr.squares import detect_square, crop_square
from sudokuocr.cut import write_cells
from sudokuocr.recognition import recognise_grid
from sudokuocr.solver import solve_file

edges = load_image("edges.png")
original = load_image("photo.png")
height, width = edges.shape[:2]

accumulator = hough_transform(edges)
lines = average_lines(line_equations(find_lines(accumulator, width, height)))
square = detect_square(width, height, lines)
grid = crop_square(original, lines, square)

write_cells(grid, "grid.txt")
recognise_grid("grid.txt", "testing_net", "grid.save")
solve_file("grid.save")  # writes grid.save.result
```

The network can be trained from a data set in which each row is a label followed by 784 pixel values:

```python
from sudokuocr.recognition import train_network

train_network("data_set.txt", "testing_net", 15000, None)
```

## What the package does not do

- There is no command-line program. Everything is used as a library.
- There is no step that prepares a raw photograph for grid detection: no blurring, contrast or gamma filters, morphology, Otsu thresholding or edge detection. The caller has to supply a binary edge image to `hough_transform`.
- There is no single call that runs the whole process. The stages are combined by hand, as in the example above.

## Running the tests

```
pip install .[test]
pytest
```