# NOTE: For displaying the decoded image in a GUI,
#       please download PyQt5.
#
# Installation (in terminal):
#   pip install PyQt5
import sys
from PyQt5.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QPushButton, QLabel,
    QFileDialog, QTextEdit, QHBoxLayout, QCheckBox
)
from PyQt5.QtGui import QPixmap, QImage
from PyQt5.QtCore import Qt
from bmp_parser import BMPError, BMPImage, decode
from bmp_writer import encode
from invert import invert


def to_qimage(image: BMPImage) -> QImage:
    # BMP stores rows bottom-up unless the height was negative
    if image.top_down:
        data = image.pixels
    else:
        data = b"".join(image.row(y) for y in range(image.height - 1, -1, -1))

    qimage = QImage(data, image.width, image.height, image.stride, QImage.Format_RGBA8888)
    # QImage does not own the buffer, so detach it
    return qimage.copy()


class BMPViewer(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("BMP Invert Preview")
        self.resize(700, 500)

        # Decoded image and its inverted copy
        self.image = None
        self.inverted = None

        layout = QVBoxLayout()

        top_layout = QHBoxLayout()

        # Button to open BMP file
        self.open_button = QPushButton("Open BMP File")
        self.open_button.setFixedSize(150, 50)
        self.open_button.clicked.connect(self.open_file)
        top_layout.addWidget(self.open_button)

        # Button to save the inverted image
        self.save_button = QPushButton("Save Inverted BMP")
        self.save_button.setFixedSize(150, 50)
        self.save_button.clicked.connect(self.save_file)
        top_layout.addWidget(self.save_button)

        top_layout.addStretch()

        # Toggle between original and inverted
        self.invert_button = QCheckBox("Invert")
        self.invert_button.setChecked(True)
        self.invert_button.clicked.connect(self.update_image)
        top_layout.addWidget(self.invert_button)

        layout.addLayout(top_layout)

        # Label to display the image
        self.image_label = QLabel("No Image Loaded")
        self.image_label.setStyleSheet("border: 1px solid black; background: white;")
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setFixedSize(700, 400)
        layout.addWidget(self.image_label)

        # Text box to display BMP metadata
        self.metadata_box = QTextEdit("No Metadata Loaded")
        self.metadata_box.setMinimumHeight(100)
        self.metadata_box.setReadOnly(True)
        layout.addWidget(self.metadata_box)

        self.setLayout(layout)

    # Open BMP file and decode pixel data
    def open_file(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Open BMP File", "", "BMP Files (*.bmp)")
        if not filepath:
            return

        try:
            with open(filepath, "rb") as f:
                image = decode(f)
        except (BMPError, OSError) as e:
            self.metadata_box.setText(f"Could not open {filepath}: {e}")
            return

        self.image = image
        self.inverted = invert(image)
        self.metadata_box.setText(
            f"file: {filepath}\n"
            f"width: {image.width}\n"
            f"height: {image.height}\n"
            f"top_down: {image.top_down}\n"
        )
        self.update_image()

    # Update image display based on settings
    def update_image(self):
        if self.image is None:
            return

        shown = self.inverted if self.invert_button.isChecked() else self.image
        pixmap = QPixmap.fromImage(to_qimage(shown)).scaled(
            self.image_label.size(), Qt.KeepAspectRatio)
        self.image_label.setPixmap(pixmap)

    def save_file(self):
        if self.inverted is None:
            return

        output_filepath, _ = QFileDialog.getSaveFileName(self, "Save inverted BMP", "", "BMP Files (*.bmp)")
        if not output_filepath:
            return

        try:
            with open(output_filepath, "wb") as f:
                encode(f, self.inverted)
        except OSError as e:
            self.metadata_box.append(f"Could not save {output_filepath}: {e}")
            return
        self.metadata_box.append(f"Saved to {output_filepath}")


def main():
    app = QApplication(sys.argv)
    viewer = BMPViewer()
    viewer.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
