from ..extensions import db
from ..utils.serialization import as_float, iso
from ..utils.timezone_utils import TimezoneUtils


class Recipe(db.Model):
    __tablename__ = 'recipe'
    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('product.id'), nullable=False, index=True)
    yield_quantity = db.Column(db.Integer, nullable=False, default=1)
    time_required_mins = db.Column(db.Integer, nullable=False, default=0)
    instructions = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)
    updated_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now, onupdate=TimezoneUtils.utc_now)

    __table_args__ = (
        db.CheckConstraint('yield_quantity >= 1', name='ck_recipe_yield_positive'),
        db.CheckConstraint('time_required_mins >= 0', name='ck_recipe_time_non_negative'),
    )

    product = db.relationship('Product', back_populates='recipes')
    ingredients = db.relationship(
        'RecipeIngredient',
        back_populates='recipe',
        cascade='all, delete-orphan',
        order_by='RecipeIngredient.id',
    )

    def to_dict(self, include_ingredients=True):
        data = {
            'id': self.id,
            'product_id': self.product_id,
            'product_name': self.product.name if self.product else None,
            'product_category': self.product.category if self.product else None,
            'yield_quantity': self.yield_quantity,
            'time_required_mins': self.time_required_mins,
            'instructions': self.instructions,
            'created_at': iso(self.created_at),
            'updated_at': iso(self.updated_at),
        }
        if include_ingredients:
            data['ingredients'] = [ingredient.to_dict() for ingredient in self.ingredients]
        return data

    def __repr__(self):
        return f'<Recipe {self.id} product={self.product_id}>'


class RecipeIngredient(db.Model):
    """Quantity of one raw material consumed per unit of recipe output."""
    __tablename__ = 'recipe_ingredient'
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False, index=True)
    raw_material_id = db.Column(db.Integer, db.ForeignKey('raw_material.id'), nullable=False, index=True)
    quantity = db.Column(db.Numeric(14, 3), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)

    __table_args__ = (
        db.UniqueConstraint('recipe_id', 'raw_material_id', name='_recipe_material_uc'),
        db.CheckConstraint('quantity > 0', name='ck_recipe_ingredient_quantity_positive'),
    )

    recipe = db.relationship('Recipe', back_populates='ingredients')
    raw_material = db.relationship('RawMaterial')

    def to_dict(self):
        material = self.raw_material
        return {
            'id': self.id,
            'raw_material_id': self.raw_material_id,
            'name': material.name if material else None,
            'unit': material.unit if material else None,
            'quantity': as_float(self.quantity),
            'stock_quantity': as_float(material.stock_quantity) if material else None,
        }
